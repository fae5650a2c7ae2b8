"""Type definitions and data models."""

from dataclasses import dataclass, fields
from typing import Optional, Dict, Any

from .constants import (
    CURRENT_VERSION,
    DEFAULT_IV_LENGTH,
    DEFAULT_PBKDF2_ITERATIONS,
    DEFAULT_SALT_LENGTH,
    IV_LENGTH_RANGE,
    MIN_PBKDF2_ITERATIONS,
    SALT_LENGTH_RANGE,
)


_CAMEL_CASE_KEYS = {
    "urlSafe": "url_safe",
    "noPadding": "no_padding",
    "saltLength": "salt_length",
    "ivLength": "iv_length",
    "includeMetadata": "include_metadata",
}


def _in_range(value: Optional[int], bounds: tuple) -> bool:
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        return False
    low, high = bounds
    return low <= value <= high


@dataclass(frozen=True)
class EncodingOptions:
    """
    Per-call options for encode and decode.

    ``None`` means the caller did not set the option. Numeric options outside
    their accepted range fall back to the defaults instead of raising.
    """
    url_safe: Optional[bool] = None
    encoding: Optional[str] = None
    password: Optional[str] = None
    compress: Optional[bool] = None
    no_padding: Optional[bool] = None
    iterations: Optional[int] = None
    salt_length: Optional[int] = None
    iv_length: Optional[int] = None
    include_metadata: Optional[bool] = None

    def resolved_salt_length(self, default: int = DEFAULT_SALT_LENGTH) -> int:
        """Salt length in bytes, or the default when unset or out of range."""
        if _in_range(self.salt_length, SALT_LENGTH_RANGE):
            return self.salt_length
        return default

    def resolved_iv_length(self, default: int = DEFAULT_IV_LENGTH) -> int:
        """IV length in bytes, or the default when unset or out of range."""
        if _in_range(self.iv_length, IV_LENGTH_RANGE):
            return self.iv_length
        return default

    def resolved_iterations(self, default: int = DEFAULT_PBKDF2_ITERATIONS) -> int:
        """PBKDF2 rounds, or the default when unset or below the floor."""
        value = self.iterations
        if isinstance(value, int) and not isinstance(value, bool) and value >= MIN_PBKDF2_ITERATIONS:
            return value
        return default

    @property
    def has_password(self) -> bool:
        return isinstance(self.password, str) and bool(self.password)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EncodingOptions":
        """Create from a dictionary with snake_case or camelCase keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in known:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, leaving out unset options."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class EncodingMetadata:
    """Self-describing header embedded ahead of the payload."""
    encoding: str
    compressed: bool = False
    version: int = CURRENT_VERSION
