"""Multi-encoding Base64 codec with optional compression, encryption and metadata."""

from .codec import MultiEncodingBase64, decode_text, encode_text, get_default_codec
from .common.types import EncodingMetadata, EncodingOptions
from .config import Config, load_config
from .registry import EncodingRegistry
from .utils import (
    Base64CodecError,
    CompressionError,
    ConfigError,
    EncryptionError,
    FormatError,
    TranscodingError,
    UnsupportedEncodingError,
)

__version__ = "1.0.0"

__all__ = [
    "MultiEncodingBase64",
    "EncodingRegistry",
    "EncodingOptions",
    "EncodingMetadata",
    "Config",
    "load_config",
    "encode_text",
    "decode_text",
    "get_default_codec",
    "Base64CodecError",
    "CompressionError",
    "ConfigError",
    "EncryptionError",
    "FormatError",
    "TranscodingError",
    "UnsupportedEncodingError",
]
