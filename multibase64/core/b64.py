"""Standard and URL-safe Base64 text helpers."""

import base64
import binascii

from ..utils import FormatError


def to_url_safe(standard: str, strip_padding: bool = False) -> str:
    """Swap ``+``/``/`` for ``-``/``_`` and optionally drop trailing ``=``."""
    result = standard.replace("+", "-").replace("/", "_")
    if strip_padding:
        result = result.rstrip("=")
    return result


def to_standard(text: str) -> str:
    """Map the URL-safe alphabet back to standard Base64 and restore padding."""
    result = text.replace("-", "+").replace("_", "/")
    padding = 4 - (len(result) % 4)
    if padding < 4:
        result += "=" * padding
    return result


def encode_bytes(data: bytes) -> str:
    """Encode raw bytes with the standard alphabet."""
    return base64.b64encode(data).decode("ascii")


def decode_text(text: str) -> bytes:
    """
    Decode standard or URL-safe Base64, with or without padding.

    Raises:
        FormatError: If the text is not valid Base64
    """
    try:
        return base64.b64decode(to_standard(text), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise FormatError(f"Invalid Base64 input: {exc}") from exc
