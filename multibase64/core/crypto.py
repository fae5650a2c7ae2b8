"""AES-256-GCM encryption and PBKDF2 key derivation logic."""

import os
from typing import Optional, Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..common.constants import (
    DEFAULT_PBKDF2_ITERATIONS,
    KEY_LENGTH,
    MAX_ENVELOPE_IV_LENGTH,
    MAX_ENVELOPE_SALT_LENGTH,
    MIN_PBKDF2_ITERATIONS,
)
from ..utils import EncryptionError, FormatError


def derive_encryption_key(
    password: str, salt: bytes, iterations: int = DEFAULT_PBKDF2_ITERATIONS
) -> bytes:
    """
    Derive a 256-bit encryption key from password using PBKDF2.

    Args:
        password: User password string
        salt: Random salt
        iterations: PBKDF2-HMAC-SHA256 rounds

    Returns:
        32-byte encryption key
    """
    if iterations < MIN_PBKDF2_ITERATIONS:
        raise EncryptionError(
            f"Iteration count must be at least {MIN_PBKDF2_ITERATIONS}."
        )
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=iterations,
    )
    try:
        return kdf.derive(password.encode("utf-8"))
    except Exception as exc:
        raise EncryptionError("Key derivation failed.") from exc


def pack_config_byte(salt_length: int, iv_length: int) -> int:
    """
    Build the envelope config byte: high nibble ``salt - 8``, low nibble ``iv - 12``.

    Raises:
        FormatError: If either length cannot be represented in four bits
    """
    if not 8 <= salt_length <= MAX_ENVELOPE_SALT_LENGTH:
        raise FormatError(f"Salt length {salt_length} cannot be stored in the envelope.")
    if not 12 <= iv_length <= MAX_ENVELOPE_IV_LENGTH:
        raise FormatError(f"IV length {iv_length} cannot be stored in the envelope.")
    return ((salt_length - 8) << 4) | (iv_length - 12)


def unpack_config_byte(config: int) -> Tuple[int, int]:
    """Return ``(salt_length, iv_length)`` stored in a config byte."""
    return ((config >> 4) & 0x0F) + 8, (config & 0x0F) + 12


def encrypt_data(
    data: bytes,
    password: str,
    salt_length: int,
    iv_length: int,
    iterations: int = DEFAULT_PBKDF2_ITERATIONS,
) -> bytes:
    """
    Encrypt data using AES-256-GCM.

    Args:
        data: Data to encrypt
        password: User password
        salt_length: Salt size in bytes (8-23)
        iv_length: Nonce size in bytes (12-27)
        iterations: PBKDF2 rounds

    Returns:
        Envelope: config byte + salt + nonce + ciphertext. Empty input yields
        empty output and an empty password returns the data unchanged.

    Raises:
        EncryptionError: If key derivation or encryption fails
        FormatError: If the lengths cannot be stored in the config byte
    """
    if not password:
        return data
    if not data:
        return b""

    config = pack_config_byte(salt_length, iv_length)
    salt = os.urandom(salt_length)
    nonce = os.urandom(iv_length)
    key = derive_encryption_key(password, salt, iterations)
    try:
        ciphertext = AESGCM(key).encrypt(nonce, bytes(data), None)
    except (ValueError, OverflowError) as exc:
        raise EncryptionError(f"Encryption failed: {exc}") from exc
    return bytes([config]) + salt + nonce + ciphertext


def decrypt_data(
    data: bytes,
    password: str,
    iterations: Optional[int] = None,
) -> bytes:
    """
    Decrypt an envelope produced by encrypt_data.

    The iteration count is not part of the envelope, so callers must pass the
    value used for encryption when it differs from the default.

    Args:
        data: Envelope bytes (config + salt + nonce + ciphertext)
        password: User password
        iterations: PBKDF2 rounds used during encryption

    Returns:
        Decrypted data

    Raises:
        FormatError: If the envelope is too short or lacks ciphertext
        EncryptionError: If the password is wrong or the data is corrupted
    """
    if not password:
        return data
    if len(data) < 2:
        raise FormatError("Invalid encrypted data: too short.")

    salt_length, iv_length = unpack_config_byte(data[0])
    header_length = 1 + salt_length + iv_length
    if len(data) < header_length:
        raise FormatError(
            f"Invalid encrypted data: expected at least {header_length} bytes, "
            f"got {len(data)}."
        )

    salt = bytes(data[1:1 + salt_length])
    nonce = bytes(data[1 + salt_length:header_length])
    ciphertext = bytes(data[header_length:])
    if not ciphertext:
        # Exact header length: the original payload was empty.
        return b""

    key = derive_encryption_key(
        password, salt, iterations or DEFAULT_PBKDF2_ITERATIONS
    )
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag as exc:
        raise EncryptionError(
            "Decryption failed. Incorrect password or corrupted data."
        ) from exc
