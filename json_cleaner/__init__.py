"""Remove duplicate "_path" entries from a JSON manifest without disturbing its formatting."""

from .detector import detect_duplicate_paths, detect_duplicates
from .errors import (
    CleanerError,
    FormatError,
    InputNotFoundError,
    ParseError,
    RemovalMismatchError,
    UsageError,
)
from .jsonc import load_jsonc
from .remover import find_removable_spans, remove_marked_spans

__version__ = "1.0.0"

__all__ = [
    "CleanerError",
    "FormatError",
    "InputNotFoundError",
    "ParseError",
    "RemovalMismatchError",
    "UsageError",
    "detect_duplicate_paths",
    "detect_duplicates",
    "find_removable_spans",
    "load_jsonc",
    "remove_marked_spans",
]
