"""Zlib (deflate) compression and decompression logic."""

import zlib

from ..utils import CompressionError


def compress_data(data: bytes, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
    """
    Compress data using zlib deflate.

    Args:
        data: Data to compress
        level: Compression level (0-9, -1 for the zlib default)

    Returns:
        Compressed data

    Raises:
        CompressionError: If compression fails
    """
    try:
        return zlib.compress(bytes(data), level)
    except (zlib.error, TypeError, ValueError) as exc:
        raise CompressionError(f"Compression failed: {exc}") from exc


def decompress_data(data: bytes) -> bytes:
    """
    Decompress zlib data.

    Args:
        data: Compressed data

    Returns:
        Decompressed data

    Raises:
        CompressionError: If decompression fails
    """
    try:
        return zlib.decompress(bytes(data))
    except (zlib.error, TypeError, ValueError) as exc:
        raise CompressionError(
            "Decompression failed. Data may be corrupted or was never compressed."
        ) from exc
