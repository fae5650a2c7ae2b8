"""Multi-encoding Base64 codec with optional compression, encryption and metadata."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set, Union

from .common.constants import MAX_ENVELOPE_SALT_LENGTH, UTF8
from .common.logging import get_logger
from .common.types import EncodingMetadata, EncodingOptions
from .config import Config
from .core import b64
from .core.compression import compress_data, decompress_data
from .core.crypto import decrypt_data, encrypt_data
from .core.metadata import extract_metadata, frame_metadata
from .core.transcoding import Transcoder
from .registry import EncodingRegistry
from .utils import (
    Base64CodecError,
    CompressionError,
    ConfigError,
    EncryptionError,
    FormatError,
    UnsupportedEncodingError,
    format_ratio,
)

logger = get_logger(__name__)

OptionsLike = Union[EncodingOptions, Dict[str, Any], None]


def _coerce_options(options: OptionsLike) -> EncodingOptions:
    if isinstance(options, EncodingOptions):
        return options
    return EncodingOptions.from_dict(options)


class MultiEncodingBase64:
    """
    Base64 converter that supports multiple character-set encodings.

    ``encode`` runs transcode, compress, metadata framing and encryption
    before Base64; ``decode`` reverses the order. Failures are logged and
    reported as ``None``; no exception escapes the public coroutines.

    The metadata header is framed around the compressed body rather than
    compressed with it, so compressed payloads that carry the header inside
    the deflate stream are not read back as self-describing.
    """

    def __init__(
        self,
        debug_mode: Optional[bool] = None,
        config: Optional[Config] = None,
        transcoder: Optional[Transcoder] = None,
    ) -> None:
        self._config = config or Config.get_instance()
        self._debug_mode = self._config.debug if debug_mode is None else debug_mode
        self._transcoder = transcoder or Transcoder()
        self._registry = EncodingRegistry(self._transcoder, log=self._log)
        self._log("MultiEncodingBase64 initialized.")
        if list(self._config.encodings) != [UTF8]:
            self._registry.configure(list(self._config.encodings))

    def _log(self, message: str, level: int = logging.INFO) -> None:
        if self._debug_mode or level >= logging.ERROR:
            logger.log(level, message)

    @property
    def debug_mode(self) -> bool:
        return self._debug_mode

    def set_debug_mode(self, enabled: bool) -> None:
        self._debug_mode = bool(enabled)
        self._log(f"Debug mode {'enabled' if enabled else 'disabled'}")

    # Registry management

    def configure(self, encodings: List[str]) -> None:
        """Set the requested encodings, filtered by environment support."""
        self._registry.configure(encodings)

    def supported_encodings(self) -> Set[str]:
        return self._registry.supported_encodings()

    def default_encoding(self) -> Optional[str]:
        return self._registry.default_encoding()

    @property
    def registry(self) -> EncodingRegistry:
        return self._registry

    def _resolve_encoding(self, options: EncodingOptions) -> str:
        requested = options.encoding
        if requested is not None and not isinstance(requested, str):
            raise UnsupportedEncodingError(f"Encoding name must be a string, got {requested!r}.")
        target = (requested or self._registry.default_encoding() or UTF8).lower()
        if not self._registry.is_supported(target):
            raise UnsupportedEncodingError(f"The encoding '{target}' is not supported.")
        return target

    # Cipher stage

    async def _encrypt_bytes_with_password(
        self, data: bytes, options: EncodingOptions
    ) -> Optional[bytes]:
        salt_length = options.resolved_salt_length(self._config.salt_length)
        if salt_length > MAX_ENVELOPE_SALT_LENGTH:
            self._log(
                f"Salt length {salt_length} exceeds the envelope limit; "
                f"using {MAX_ENVELOPE_SALT_LENGTH}.",
                logging.WARNING,
            )
            salt_length = MAX_ENVELOPE_SALT_LENGTH
        iv_length = options.resolved_iv_length(self._config.iv_length)
        iterations = options.resolved_iterations(self._config.iterations)
        self._log(
            f"Encrypting with: Salt={salt_length}bytes, IV={iv_length}bytes, "
            f"Iterations={iterations}"
        )
        try:
            # Key derivation is CPU-bound, offload to thread pool
            return await asyncio.to_thread(
                encrypt_data, data, options.password, salt_length, iv_length, iterations
            )
        except (EncryptionError, FormatError) as exc:
            self._log(f"Encryption failed: {exc}", logging.ERROR)
            return None

    async def _decrypt_bytes_with_password(
        self, data: bytes, options: EncodingOptions
    ) -> Optional[bytes]:
        iterations = options.resolved_iterations(self._config.iterations)
        try:
            return await asyncio.to_thread(
                decrypt_data, data, options.password, iterations
            )
        except EncryptionError:
            self._log("Decryption failed. Incorrect password or corrupted data.", logging.ERROR)
            return None
        except FormatError as exc:
            self._log(str(exc), logging.ERROR)
            return None

    # Public pipelines

    async def encode(self, text: str, options: OptionsLike = None) -> Optional[str]:
        """
        Encode text to Base64, applying the requested transforms.

        Args:
            text: Text to encode.
            options: EncodingOptions or an equivalent dictionary.

        Returns:
            Base64 (or Base64-URL) string, or None on failure.
        """
        try:
            return await self._encode(text, _coerce_options(options))
        except Base64CodecError as exc:
            self._log(f"Encoding Error: {exc}", logging.ERROR)
        except Exception as exc:
            self._log(f"Error during encode process: {exc!r}", logging.ERROR)
        return None

    async def _encode(self, text: str, options: EncodingOptions) -> str:
        target = self._resolve_encoding(options)
        if not isinstance(text, str):
            raise FormatError("Input must be a string.")

        payload, used_encoding = self._transcoder.text_to_bytes(text, target)
        if used_encoding != target:
            self._log(
                f"Non-UTF-8 encoding '{target}' could not encode the text. "
                f"Falling back to UTF-8.",
                logging.WARNING,
            )
        else:
            self._log(f"Encoded text using {used_encoding}")

        compressed = False
        if options.compress:
            before = len(payload)
            try:
                payload = compress_data(payload)
                compressed = True
                self._log(
                    f"Compressed data: {before} -> {len(payload)} bytes "
                    f"({format_ratio(before, len(payload))})"
                )
            except CompressionError as exc:
                self._log(f"{exc} Using uncompressed data.", logging.ERROR)

        if options.include_metadata:
            metadata = EncodingMetadata(encoding=used_encoding, compressed=compressed)
            payload = frame_metadata(payload, metadata)
            self._log(f"Added metadata ({metadata})")

        if options.has_password:
            encrypted = await self._encrypt_bytes_with_password(payload, options)
            if encrypted is None:
                raise EncryptionError("Encryption step failed.")
            payload = encrypted
            self._log(f"Encrypted data ({len(payload)} bytes)")

        result = b64.encode_bytes(payload)
        if options.url_safe or options.no_padding:
            result = b64.to_url_safe(result, strip_padding=bool(options.no_padding))
            self._log(f"Applied URL-safe{' with no padding' if options.no_padding else ''}")

        self._log(f"Encoding complete: final size {len(result)} characters")
        return result

    async def decode(self, base64_text: str, options: OptionsLike = None) -> Optional[str]:
        """
        Decode Base64 text, reversing the transforms applied by encode.

        Args:
            base64_text: Standard or URL-safe Base64, padded or not.
            options: EncodingOptions or an equivalent dictionary.

        Returns:
            Decoded text, or None on failure.
        """
        try:
            return await self._decode(base64_text, _coerce_options(options))
        except Base64CodecError as exc:
            self._log(f"Decoding Error: {exc}", logging.ERROR)
        except Exception as exc:
            self._log(f"Error during decode process: {exc!r}", logging.ERROR)
        return None

    async def _decode(self, base64_text: str, options: EncodingOptions) -> str:
        target = self._resolve_encoding(options)
        if not isinstance(base64_text, str):
            raise FormatError("Input must be a string.")

        payload = b64.decode_text(base64_text)
        self._log(f"Base64 decoded: {len(payload)} bytes")

        if options.has_password:
            decrypted = await self._decrypt_bytes_with_password(payload, options)
            if decrypted is None:
                raise EncryptionError("Decryption step failed.")
            payload = decrypted
            self._log(f"Decrypted data: {len(payload)} bytes")

        compress = bool(options.compress)
        metadata = None
        try:
            metadata, payload = extract_metadata(payload)
        except FormatError as exc:
            self._log(f"Metadata extraction failed: {exc}", logging.WARNING)

        if metadata is not None:
            self._log(
                f"Found metadata: version={metadata.version}, "
                f"encoding={metadata.encoding}, compressed={metadata.compressed}"
            )
            if options.compress is None:
                compress = metadata.compressed
            if not options.encoding:
                if self._registry.is_supported(metadata.encoding):
                    target = metadata.encoding.lower()
                    self._log(f"Using encoding from metadata: {target}")
                else:
                    self._log(
                        f"Metadata encoding '{metadata.encoding}' is not supported; "
                        f"using '{target}'.",
                        logging.WARNING,
                    )
        elif options.include_metadata:
            self._log("No metadata found but includeMetadata flag was set", logging.WARNING)

        if compress:
            before = len(payload)
            try:
                payload = decompress_data(payload)
                self._log(f"Decompressed data: {before} -> {len(payload)} bytes")
            except CompressionError as exc:
                if metadata is not None:
                    raise
                self._log(
                    f"{exc} Was this data actually compressed? Using it as is.",
                    logging.WARNING,
                )

        text, used_encoding = self._transcoder.bytes_to_text(payload, target)
        if used_encoding != target:
            self._log(
                f"Non-UTF-8 encoding '{target}' could not decode the data. "
                f"Falling back to UTF-8.",
                logging.WARNING,
            )
        self._log(f"Decoding complete: final text length {len(text)} characters")
        return text


_default_codec: Optional[MultiEncodingBase64] = None


def get_default_codec() -> MultiEncodingBase64:
    """Return a lazily created codec configured from the environment."""
    global _default_codec
    if _default_codec is None:
        _default_codec = MultiEncodingBase64()
    return _default_codec


async def encode_text(text: str, options: OptionsLike = None) -> Optional[str]:
    """Encode with the default codec. Returns None if the environment config is invalid."""
    try:
        codec = get_default_codec()
    except ConfigError as exc:
        logger.error("Cannot create default codec: %s", exc)
        return None
    return await codec.encode(text, options)


async def decode_text(base64_text: str, options: OptionsLike = None) -> Optional[str]:
    """Decode with the default codec. Returns None if the environment config is invalid."""
    try:
        codec = get_default_codec()
    except ConfigError as exc:
        logger.error("Cannot create default codec: %s", exc)
        return None
    return await codec.decode(base64_text, options)
