"""Tests for text and bytes transcoding."""

from __future__ import annotations

import unittest

from multibase64.core.transcoding import (
    CodecsTranscoder,
    NativeUtf8Codec,
    Transcoder,
    first_success,
)
from multibase64.utils import TranscodingError


class TestCodecsTranscoder(unittest.TestCase):
    def test_encoding_exists(self) -> None:
        library = CodecsTranscoder()
        self.assertTrue(library.encoding_exists("utf-8"))
        self.assertTrue(library.encoding_exists("latin-1"))
        self.assertFalse(library.encoding_exists("auto-detect"))
        self.assertFalse(library.encoding_exists("no-such-encoding"))
        # binary transforms are not character sets
        self.assertFalse(library.encoding_exists("base64"))

    def test_encode_failure_raises(self) -> None:
        with self.assertRaises(TranscodingError):
            CodecsTranscoder().encode("한글", "ascii")


class TestFirstSuccess(unittest.TestCase):
    def test_returns_first_success(self) -> None:
        def fail():
            raise TranscodingError("nope")

        label, value = first_success([("a", fail), ("b", lambda: 2), ("c", lambda: 3)])
        self.assertEqual((label, value), ("b", 2))

    def test_all_fail(self) -> None:
        def fail():
            raise TranscodingError("nope")

        with self.assertRaises(TranscodingError):
            first_success([("a", fail), ("b", fail)])


class TestTranscoder(unittest.TestCase):
    def setUp(self) -> None:
        self.transcoder = Transcoder()

    def test_latin1_round_trip(self) -> None:
        data, used = self.transcoder.text_to_bytes("café", "latin-1")
        self.assertEqual((data, used), (b"caf\xe9", "latin-1"))
        self.assertEqual(self.transcoder.bytes_to_text(data, "latin-1"), ("café", "latin-1"))

    def test_unencodable_text_falls_back_to_utf8(self) -> None:
        data, used = self.transcoder.text_to_bytes("한글", "latin-1")
        self.assertEqual(used, "utf-8")
        self.assertEqual(data, "한글".encode("utf-8"))

    def test_invalid_utf8_is_replaced(self) -> None:
        text, used = self.transcoder.bytes_to_text(b"ok\xff", "utf-8")
        self.assertEqual(text, "ok�")
        self.assertEqual(used, "utf-8")

    def test_native_codec_used_when_library_unaware(self) -> None:
        class EmptyLibrary(CodecsTranscoder):
            def encoding_exists(self, name: str) -> bool:
                return False

        transcoder = Transcoder(library=EmptyLibrary())
        self.assertTrue(transcoder.is_supported("UTF-8"))
        self.assertFalse(transcoder.is_supported("latin-1"))
        self.assertEqual(transcoder.text_to_bytes("é", "utf-8"), (b"\xc3\xa9", "utf-8"))

    def test_native_accepts_only_utf8(self) -> None:
        native = NativeUtf8Codec()
        self.assertTrue(native.accepts("UTF8"))
        self.assertFalse(native.accepts("ascii"))


if __name__ == "__main__":
    unittest.main()
