"""Tests for configuration loading."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from multibase64.config import Config, load_config
from multibase64.utils import ConfigError


class TestConfig(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.env_file = Path(self.temp_dir.name) / ".env"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()
        Config.reset_instance()

    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            config = load_config(self.env_file)
        self.assertEqual(config, Config())
        self.assertEqual(config.encodings, ("utf-8",))
        self.assertEqual(config.iterations, 100_000)
        self.assertFalse(config.debug)

    def test_environment_overrides(self) -> None:
        env = {
            "MULTIBASE64_ENCODINGS": "utf-8, latin-1,,ascii",
            "MULTIBASE64_ITERATIONS": "20000",
            "MULTIBASE64_SALT_LENGTH": "16",
            "MULTIBASE64_IV_LENGTH": "16",
            "MULTIBASE64_DEBUG": "yes",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = load_config(self.env_file)
        self.assertEqual(config.encodings, ("utf-8", "latin-1", "ascii"))
        self.assertEqual(config.iterations, 20_000)
        self.assertEqual(config.salt_length, 16)
        self.assertEqual(config.iv_length, 16)
        self.assertTrue(config.debug)

    def test_env_file_is_read(self) -> None:
        self.env_file.write_text("MULTIBASE64_ITERATIONS=30000\n", encoding="utf-8")
        with mock.patch.dict(os.environ, {}, clear=True):
            config = load_config(self.env_file)
        self.assertEqual(config.iterations, 30_000)

    def test_invalid_values(self) -> None:
        cases = [
            {"MULTIBASE64_ITERATIONS": "abc"},
            {"MULTIBASE64_ITERATIONS": "5000"},
            {"MULTIBASE64_SALT_LENGTH": "30"},
            {"MULTIBASE64_IV_LENGTH": "11"},
            {"MULTIBASE64_ENCODINGS": " , "},
        ]
        for env in cases:
            with self.subTest(env=env), mock.patch.dict(os.environ, env, clear=True):
                with self.assertRaises(ConfigError):
                    load_config(self.env_file)


if __name__ == "__main__":
    unittest.main()
