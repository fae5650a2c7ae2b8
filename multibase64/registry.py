"""Registry of character-set encodings usable in the current environment."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional, Set

from .common.constants import AUTO_DETECT, UTF8
from .core.transcoding import Transcoder

LogFunc = Callable[[str, int], None]


class EncodingRegistry:
    """
    Requested encodings intersected with what the environment supports.

    ``configure`` replaces the state wholesale under a lock, so concurrent
    readers always observe either the previous or the new configuration.
    """

    def __init__(
        self,
        transcoder: Optional[Transcoder] = None,
        log: Optional[LogFunc] = None,
    ) -> None:
        self._transcoder = transcoder or Transcoder()
        self._log = log or (lambda message, level: logging.getLogger(__name__).log(level, message))
        self._lock = threading.RLock()
        self._requested: List[str] = []
        # dict keeps insertion order for the default fallback
        self._supported: Dict[str, None] = {}
        self._default: Optional[str] = None
        self._ensure_utf8_supported()

    def _ensure_utf8_supported(self) -> None:
        if self._transcoder.is_supported(UTF8):
            self._supported.setdefault(UTF8, None)
            self._default = UTF8
        else:
            self._log("CRITICAL: UTF-8 encoding is not supported!", logging.ERROR)

    def is_encoding_supported(self, name: str) -> bool:
        """Check environment support for an encoding name."""
        return self._transcoder.is_supported(name.lower())

    def configure(self, requested: List[str]) -> None:
        """
        Set the requested encodings, keeping only those the environment supports.

        Args:
            requested: Encoding names, matched case-insensitively.
        """
        if not isinstance(requested, (list, tuple)) or any(
            not isinstance(name, str) for name in requested
        ):
            self._log("Invalid encodings list.", logging.ERROR)
            return

        self._log("Checking support for requested encodings...", logging.INFO)
        supported: Dict[str, None] = {}
        for name in requested:
            lower = name.lower()
            if lower == AUTO_DETECT:
                self._log("'AUTO-DETECT' is not supported.", logging.WARNING)
                continue
            if self.is_encoding_supported(lower):
                supported.setdefault(lower, None)
                self._log(f"✓ '{lower}' is supported", logging.INFO)
            else:
                self._log(f"✗ '{lower}' is NOT supported", logging.WARNING)

        if self.is_encoding_supported(UTF8):
            supported.setdefault(UTF8, None)

        if UTF8 in supported:
            default: Optional[str] = UTF8
        elif supported:
            default = next(iter(supported))
        else:
            default = None
            self._log("CRITICAL: No supported encodings found!", logging.ERROR)

        with self._lock:
            self._requested = list(requested)
            self._supported = supported
            self._default = default

        self._log(
            f"Requested: {', '.join(requested) or 'NONE'} | "
            f"Supported: {', '.join(supported) or 'NONE'} | "
            f"Default: {default or 'None'}",
            logging.INFO,
        )

    def supported_encodings(self) -> Set[str]:
        with self._lock:
            return set(self._supported)

    def requested_encodings(self) -> List[str]:
        with self._lock:
            return list(self._requested)

    def default_encoding(self) -> Optional[str]:
        with self._lock:
            return self._default

    def is_supported(self, name: str) -> bool:
        """True if ``name`` is in the configured supported set."""
        with self._lock:
            return name.lower() in self._supported
