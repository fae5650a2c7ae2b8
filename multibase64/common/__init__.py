"""Common constants, types and logging."""

from .constants import CURRENT_VERSION, UTF8, AUTO_DETECT
from .types import EncodingOptions, EncodingMetadata
from .logging import get_logger, setup_logging

__all__ = [
    "CURRENT_VERSION",
    "UTF8",
    "AUTO_DETECT",
    "EncodingOptions",
    "EncodingMetadata",
    "get_logger",
    "setup_logging",
]
