"""Configuration management for the multi-encoding Base64 codec."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, Tuple

from dotenv import load_dotenv

from .common.constants import (
    DEFAULT_IV_LENGTH,
    DEFAULT_PBKDF2_ITERATIONS,
    DEFAULT_SALT_LENGTH,
    IV_LENGTH_RANGE,
    MAX_ENVELOPE_SALT_LENGTH,
    MIN_PBKDF2_ITERATIONS,
    UTF8,
)
from .utils import ConfigError, parse_bool
ENV_ENCODINGS = "MULTIBASE64_ENCODINGS"
ENV_ITERATIONS = "MULTIBASE64_ITERATIONS"
ENV_SALT_LENGTH = "MULTIBASE64_SALT_LENGTH"
ENV_IV_LENGTH = "MULTIBASE64_IV_LENGTH"
ENV_DEBUG = "MULTIBASE64_DEBUG"


def _env_path() -> Path:
    return Path.cwd() / ".env"


@dataclass(frozen=True)
class Config:
    """Singleton configuration object."""

    encodings: Tuple[str, ...] = (UTF8,)
    iterations: int = DEFAULT_PBKDF2_ITERATIONS
    salt_length: int = DEFAULT_SALT_LENGTH
    iv_length: int = DEFAULT_IV_LENGTH
    debug: bool = False

    _instance: ClassVar[Optional["Config"]] = None

    @classmethod
    def get_instance(cls) -> "Config":
        """
        Retrieve a singleton instance of Config.

        Returns:
            Config singleton instance.
        """
        if cls._instance is None:
            cls._instance = load_config()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the cached instance so the next call reloads the environment."""
        cls._instance = None


def _parse_int(value: str, name: str, low: int, high: Optional[int] = None) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid integer for {name}.") from exc
    if parsed < low or (high is not None and parsed > high):
        bounds = f"between {low} and {high}" if high is not None else f"at least {low}"
        raise ConfigError(f"{name} must be {bounds}.")
    return parsed


def _parse_encodings(value: str) -> Tuple[str, ...]:
    names = tuple(part.strip() for part in value.split(",") if part.strip())
    if not names:
        raise ConfigError(f"{ENV_ENCODINGS} must list at least one encoding.")
    return names


def load_config(env_file: Optional[Path] = None) -> Config:
    """
    Load and validate configuration from the environment and an optional .env file.

    Args:
        env_file: Path to a .env file. Defaults to ``.env`` in the working directory.

    Returns:
        Config instance.
    """
    env_file = env_file or _env_path()
    if env_file.exists():
        load_dotenv(env_file)

    encodings = os.getenv(ENV_ENCODINGS, UTF8).strip()
    iterations = os.getenv(ENV_ITERATIONS, str(DEFAULT_PBKDF2_ITERATIONS)).strip()
    salt_length = os.getenv(ENV_SALT_LENGTH, str(DEFAULT_SALT_LENGTH)).strip()
    iv_length = os.getenv(ENV_IV_LENGTH, str(DEFAULT_IV_LENGTH)).strip()
    debug = os.getenv(ENV_DEBUG, "").strip()

    return Config(
        encodings=_parse_encodings(encodings),
        iterations=_parse_int(iterations, ENV_ITERATIONS, MIN_PBKDF2_ITERATIONS),
        salt_length=_parse_int(salt_length, ENV_SALT_LENGTH, 8, MAX_ENVELOPE_SALT_LENGTH),
        iv_length=_parse_int(iv_length, ENV_IV_LENGTH, *IV_LENGTH_RANGE),
        debug=parse_bool(debug),
    )
