"""
Delete repeated `files` entries from the raw manifest text.

The scan works on physical lines and never re-serializes JSON, so every line
that is kept comes out byte-for-byte as it went in. Objects are delimited by
counting `{` and `}` per line, after comments have been blanked out, so
commented-out entries are never mistaken for real ones.

Known limitations:
  - Any line containing the string "files" switches the scan into the array,
    even if it is not the real `files` key.
  - Braces inside string values are counted like structural braces.
  - Objects sharing a physical line with another object cannot be removed
    on their own; they are left in place.
"""

import enum
import json
import logging
import re
from typing import List, NamedTuple, Optional, Set

from .jsonc import strip_comments

logger = logging.getLogger(__name__)

FILES_TOKEN = '"files"'
PATH_TOKEN = '"_path"'
PATH_PATTERN = re.compile(r'"_path"\s*:\s*"((?:[^"\\]|\\.)*)"')
COMMENT_PREFIXES = ('//', '/*', '*')


class ScanState(enum.Enum):
    OUTSIDE = "outside"
    IN_ARRAY = "in_array"
    IN_OBJECT = "in_object"


class EntrySpan(NamedTuple):
    """Lines of one `files` entry slated for removal (0-based, inclusive)."""
    path: str
    start: int
    end: int
    removal_start: int  # first line of the leading blank/comment block


def split_lines(text: str) -> List[str]:
    """Split on '\\n', keeping each line's own ending ('\\r\\n' lines keep their '\\r')."""
    parts = text.split('\n')
    lines = [part + '\n' for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def is_blank_or_comment(line: str) -> bool:
    trimmed = line.strip()
    return not trimmed or trimmed.startswith(COMMENT_PREFIXES)


def extract_path(line: str) -> Optional[str]:
    """Read the `_path` string on this line, decoding JSON escapes."""
    match = PATH_PATTERN.search(line)
    if not match:
        return None
    raw = match.group(1)
    try:
        return json.loads(f'"{raw}"')
    except json.JSONDecodeError:
        # Not a valid JSON string body; compare literally
        return raw


def scan_removable_spans(lines: List[str], duplicate_paths: Set[str]) -> List[EntrySpan]:
    """
    Single forward pass over `lines`, returning the entries to delete.

    An entry is deleted when its path is in `duplicate_paths` and an earlier
    entry in this same pass already had that path. Braces, the "files" token
    and `_path` are read from a comment-free copy of each line; the raw lines
    decide which leading blank/comment lines go with a removed entry.
    """
    code_lines = split_lines(strip_comments(''.join(lines)))
    spans: List[EntrySpan] = []
    seen: Set[str] = set()

    state = ScanState.OUTSIDE
    depth = 0
    start = -1
    path: Optional[str] = None

    for index, line in enumerate(code_lines):
        if state is ScanState.OUTSIDE and FILES_TOKEN in line:
            state = ScanState.IN_ARRAY

        opens = line.count('{')
        closes = line.count('}')

        if state is ScanState.IN_ARRAY and opens > 0:
            state = ScanState.IN_OBJECT
            start = index
            depth = opens - closes
            path = None
        elif state is ScanState.IN_OBJECT:
            depth += opens - closes

        if state is not ScanState.IN_OBJECT:
            continue

        if PATH_TOKEN in line:
            found = extract_path(line)
            if found is not None:
                path = found

        if depth != 0 or closes == 0:
            continue

        # Object closed on this line
        if path is not None:
            if path in seen and path in duplicate_paths:
                removal_start = start
                while removal_start > 0 and is_blank_or_comment(lines[removal_start - 1]):
                    removal_start -= 1
                spans.append(EntrySpan(path, start, index, removal_start))
                logger.debug(f"Removing lines {removal_start + 1}-{index + 1}: {path}")
            else:
                seen.add(path)

        state = ScanState.IN_ARRAY
        start = -1
        path = None

    return spans


def find_removable_spans(text: str, duplicate_paths: Set[str]) -> List[EntrySpan]:
    return scan_removable_spans(split_lines(text), duplicate_paths)


def drop_spans(lines: List[str], spans: List[EntrySpan]) -> str:
    """Join `lines`, leaving out every line covered by `spans`."""
    marked: Set[int] = set()
    for span in spans:
        marked.update(range(span.removal_start, span.end + 1))

    return ''.join(line for index, line in enumerate(lines) if index not in marked)


def remove_marked_spans(text: str, duplicate_paths: Set[str],
                        spans: Optional[List[EntrySpan]] = None) -> str:
    """
    Return `text` without the second and later occurrences of each duplicate path.

    Args:
        text: Original manifest text
        duplicate_paths: Paths reported as repeated by the detector
        spans: Spans already found by `find_removable_spans` for this text;
            scanned afresh when omitted

    Returns:
        The text with the removed entries' lines (and their leading
        blank/comment lines) dropped; every other line unchanged
    """
    lines = split_lines(text)
    if spans is None:
        spans = scan_removable_spans(lines, duplicate_paths)
    return drop_spans(lines, spans)
