"""Core pipeline stages (pure transforms, no shared state)."""

from .crypto import (
    derive_encryption_key,
    encrypt_data,
    decrypt_data,
    pack_config_byte,
    unpack_config_byte,
)
from .compression import compress_data, decompress_data
from .metadata import (
    serialize_metadata,
    deserialize_metadata,
    frame_metadata,
    extract_metadata,
)
from .transcoding import CodecsTranscoder, NativeUtf8Codec, Transcoder, first_success

__all__ = [
    "derive_encryption_key",
    "encrypt_data",
    "decrypt_data",
    "pack_config_byte",
    "unpack_config_byte",
    "compress_data",
    "decompress_data",
    "serialize_metadata",
    "deserialize_metadata",
    "frame_metadata",
    "extract_metadata",
    "CodecsTranscoder",
    "NativeUtf8Codec",
    "Transcoder",
    "first_success",
]
