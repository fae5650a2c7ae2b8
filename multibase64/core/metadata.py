"""Metadata header serialization and framing."""

from typing import Optional, Tuple

from ..common.constants import CURRENT_VERSION, MAX_METADATA_LENGTH, METADATA_SNIFF_LIMIT
from ..common.types import EncodingMetadata
from ..utils import FormatError


def serialize_metadata(metadata: EncodingMetadata) -> bytes:
    """
    Serialize metadata as ``[version, compressed, *utf8(encoding)]``.

    Args:
        metadata: Metadata to serialize

    Returns:
        Serialized metadata bytes

    Raises:
        FormatError: If the version does not fit in a byte or the header is too long
    """
    if not 0 <= metadata.version <= 0xFF:
        raise FormatError(f"Metadata version out of range: {metadata.version}")
    encoding_bytes = metadata.encoding.encode("utf-8")
    result = bytes([metadata.version, 1 if metadata.compressed else 0]) + encoding_bytes
    if len(result) > MAX_METADATA_LENGTH:
        raise FormatError(f"Metadata too long: {len(result)} bytes")
    return result


def deserialize_metadata(data: bytes) -> EncodingMetadata:
    """
    Parse bytes produced by serialize_metadata.

    Args:
        data: Serialized metadata

    Returns:
        Parsed metadata

    Raises:
        FormatError: If the data is too short, the version is unknown, the
            compressed flag is not 0 or 1, or the encoding name is not UTF-8
    """
    if len(data) < 3:
        raise FormatError("Invalid metadata format: too short")
    if data[0] != CURRENT_VERSION:
        raise FormatError(f"Unsupported metadata version: {data[0]}")
    if data[1] not in (0, 1):
        raise FormatError(f"Invalid metadata compressed flag: {data[1]}")
    try:
        encoding = bytes(data[2:]).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError("Invalid metadata format: encoding name is not UTF-8") from exc
    return EncodingMetadata(
        version=data[0],
        compressed=data[1] == 1,
        encoding=encoding,
    )


def frame_metadata(payload: bytes, metadata: EncodingMetadata) -> bytes:
    """Prepend ``[len, *metadata]`` to the payload."""
    header = serialize_metadata(metadata)
    return bytes([len(header)]) + header + payload


def looks_framed(data: bytes) -> bool:
    """True when the first byte is a plausible metadata length prefix."""
    return len(data) > 2 and 0 < data[0] < METADATA_SNIFF_LIMIT


def extract_metadata(data: bytes) -> Tuple[Optional[EncodingMetadata], bytes]:
    """
    Split a metadata header off the payload if one is present.

    Args:
        data: Payload that may start with a metadata header

    Returns:
        Tuple of (metadata or None, remaining payload). The payload is returned
        untouched when it does not start with a length prefix.

    Raises:
        FormatError: If a length prefix is present but the header is truncated
            or cannot be parsed
    """
    if not looks_framed(data):
        return None, data
    length = data[0]
    if len(data) < 1 + length:
        raise FormatError(
            f"Metadata header claims {length} bytes but only {len(data) - 1} remain"
        )
    metadata = deserialize_metadata(data[1:1 + length])
    return metadata, data[1 + length:]
