"""Text to bytes conversion under named character-set encodings."""

import codecs
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from ..common.constants import UTF8
from ..common.logging import get_logger
from ..utils import TranscodingError


T = TypeVar("T")
Strategy = Tuple[str, Callable[[], T]]

logger = get_logger(__name__)


class CodecsTranscoder:
    """Transcoding service backed by the ``codecs`` registry."""

    def encoding_exists(self, name: str) -> bool:
        try:
            info = codecs.lookup(name)
        except (LookupError, TypeError):
            return False
        # Binary transforms such as base64_codec are not text encodings.
        return getattr(info, "_is_text_encoding", True)

    def encode(self, text: str, name: str) -> bytes:
        try:
            return codecs.encode(text, name)
        except (UnicodeError, LookupError, TypeError) as exc:
            raise TranscodingError(f"Cannot encode text as {name}: {exc}") from exc

    def decode(self, data: bytes, name: str) -> str:
        try:
            return codecs.decode(bytes(data), name)
        except (UnicodeError, LookupError, TypeError) as exc:
            raise TranscodingError(f"Cannot decode bytes as {name}: {exc}") from exc


class NativeUtf8Codec:
    """UTF-8 only codec used as the universal fallback."""

    names = frozenset({"utf-8", "utf8", "unicode-1-1-utf-8"})

    def accepts(self, name: str) -> bool:
        return name.lower() in self.names

    def encode(self, text: str) -> bytes:
        try:
            return text.encode("utf-8")
        except UnicodeError as exc:
            raise TranscodingError(f"Cannot encode text as UTF-8: {exc}") from exc

    def decode(self, data: bytes) -> str:
        # Invalid sequences become U+FFFD instead of failing.
        return bytes(data).decode("utf-8", errors="replace")


def first_success(strategies: Iterable[Strategy]) -> Tuple[str, T]:
    """
    Run strategies in order and return the first result that does not fail.

    Args:
        strategies: ``(label, callable)`` pairs; a callable fails by raising
            TranscodingError

    Returns:
        Tuple of (label of the winning strategy, its result)

    Raises:
        TranscodingError: If every strategy fails
    """
    errors: List[str] = []
    for label, attempt in strategies:
        try:
            return label, attempt()
        except TranscodingError as exc:
            logger.debug("Strategy %s failed: %s", label, exc)
            errors.append(f"{label}: {exc}")
    raise TranscodingError("All strategies failed: " + "; ".join(errors))


class Transcoder:
    """
    Library-then-native conversion between text and bytes.

    The ordered strategies are: the transcoding library (when it knows the
    name), the native UTF-8 codec (when the target is UTF-8) and finally a
    UTF-8 fallback for any other target.
    """

    def __init__(
        self,
        library: Optional[CodecsTranscoder] = None,
        native: Optional[NativeUtf8Codec] = None,
    ):
        self.library = library if library is not None else CodecsTranscoder()
        self.native = native if native is not None else NativeUtf8Codec()

    def is_supported(self, name: str) -> bool:
        """True if the library knows the name or the native codec accepts it."""
        return self.library.encoding_exists(name) or self.native.accepts(name)

    def _strategies(self, name: str, library_call, native_call) -> List[Strategy]:
        strategies: List[Strategy] = []
        if self.library.encoding_exists(name):
            strategies.append((name, library_call))
        if self.native.accepts(name):
            strategies.append((UTF8, native_call))
        else:
            strategies.append((f"{UTF8}-fallback", native_call))
        return strategies

    def text_to_bytes(self, text: str, name: str) -> Tuple[bytes, str]:
        """
        Encode text under ``name``.

        Returns:
            Tuple of (bytes, encoding actually used)

        Raises:
            TranscodingError: If no strategy succeeds
        """
        label, data = first_success(self._strategies(
            name,
            lambda: self.library.encode(text, name),
            lambda: self.native.encode(text),
        ))
        if label == f"{UTF8}-fallback":
            return data, UTF8
        return data, label

    def bytes_to_text(self, data: bytes, name: str) -> Tuple[str, str]:
        """
        Decode bytes under ``name``.

        Returns:
            Tuple of (text, encoding actually used)

        Raises:
            TranscodingError: If no strategy succeeds
        """
        label, text = first_success(self._strategies(
            name,
            lambda: self.library.decode(data, name),
            lambda: self.native.decode(data),
        ))
        if label == f"{UTF8}-fallback":
            return text, UTF8
        return text, label
