"""Errors raised while cleaning a JSON asset manifest.

Every error here is terminal: the CLI reports the message and exits without
touching the output file.
"""

from typing import Optional


class CleanerError(Exception):
    """Base class for all json-cleaner failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsageError(CleanerError):
    """Bad command line arguments or configuration values."""


class InputNotFoundError(CleanerError):
    """The input path does not exist."""

    def __init__(self, path):
        super().__init__(f"Input file not found: {path}")
        self.path = path


class ParseError(CleanerError):
    """The input is not parseable as JSON (comments and trailing commas allowed)."""

    def __init__(self, detail: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(f"Failed to parse JSON: {detail}")
        self.detail = detail
        self.line = line
        self.column = column


class FormatError(CleanerError):
    """The document has no top-level 'files' array."""

    def __init__(self, message: str = "Invalid JSON format: missing or invalid 'files' array"):
        super().__init__(message)


class RemovalMismatchError(CleanerError):
    """The line scan would remove entries the parsed view does not consider duplicates."""

    def __init__(self, paths):
        super().__init__(
            "Refusing to write: the line scan would remove more entries than were found "
            f"duplicated for: {', '.join(paths)}"
        )
        self.paths = paths
