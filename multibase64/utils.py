"""Shared utilities for the multi-encoding Base64 codec."""

from __future__ import annotations


class Base64CodecError(Exception):
    """Base exception for codec errors."""


class ConfigError(Base64CodecError):
    """Raised when configuration is invalid or missing."""


class UnsupportedEncodingError(Base64CodecError):
    """Raised when an encoding is not available in the registry."""


class FormatError(Base64CodecError):
    """Raised when Base64 text, a cipher envelope or a metadata header is malformed."""


class EncryptionError(Base64CodecError):
    """Raised when key derivation, encryption or decryption fails."""


class CompressionError(Base64CodecError):
    """Raised when compression or decompression fails."""


class TranscodingError(Base64CodecError):
    """Raised when text cannot be converted to or from bytes."""


def parse_bool(value: str) -> bool:
    """
    Interpret an environment flag.

    Args:
        value: Raw flag value.

    Returns:
        True for 1/true/yes/on (case-insensitive).
    """
    return value.strip().lower() in {"1", "true", "yes", "on"}


def format_ratio(before: int, after: int) -> str:
    """
    Format a size change as a percentage of the original size.

    Args:
        before: Size before the transform.
        after: Size after the transform.

    Returns:
        Percentage string such as ``"42%"``.
    """
    if before <= 0:
        return "n/a"
    return f"{round(after / before * 100)}%"
