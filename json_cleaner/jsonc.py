"""
Lenient JSON loading for hand-edited manifests.

Accepts `//` line comments, `/* */` block comments and trailing commas before
`]` or `}`. Removed characters are replaced by spaces (newlines are kept) so
that line and column numbers reported by the parser still point into the
original file.
"""

import json
from typing import Any, List, Optional

from .errors import ParseError


def strip_comments(text: str) -> str:
    """Return `text` with comments and trailing commas blanked out.

    Double-quoted strings are copied untouched, escapes included.
    """
    out: List[str] = list(text)
    n = len(text)
    i = 0
    in_string = False
    pending_comma: Optional[int] = None

    def blank(start: int, end: int) -> None:
        for k in range(start, end):
            if out[k] not in '\r\n':
                out[k] = ' '

    while i < n:
        ch = text[i]

        if in_string:
            if ch == '\\':
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '/' and i + 1 < n and text[i + 1] == '/':
            end = text.find('\n', i)
            end = n if end == -1 else end
            blank(i, end)
            i = end
            continue

        if ch == '/' and i + 1 < n and text[i + 1] == '*':
            end = text.find('*/', i + 2)
            end = n if end == -1 else end + 2
            blank(i, end)
            i = end
            continue

        if ch in ' \t\r\n':
            i += 1
            continue

        # Significant character: settle any comma waiting on it
        if pending_comma is not None and ch in ']}':
            out[pending_comma] = ' '
        pending_comma = None

        if ch == ',':
            pending_comma = i
        elif ch == '"':
            in_string = True
        i += 1

    return ''.join(out)


def load_jsonc(text: str) -> Any:
    """
    Parse JSON text that may contain comments and trailing commas.

    Args:
        text: Raw document text

    Returns:
        The parsed document

    Raises:
        ParseError: If the text is not valid JSON once comments are removed
    """
    if text.startswith('\ufeff'):
        text = text[1:]
    try:
        return json.loads(strip_comments(text))
    except json.JSONDecodeError as e:
        raise ParseError(str(e), line=e.lineno, column=e.colno)
