"""Find which `_path` values repeat in a manifest's top-level `files` array."""

import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from .errors import FormatError

logger = logging.getLogger(__name__)

FILES_KEY = "files"
PATH_KEY = "_path"


def find_files_array(tree: Any) -> List[Any]:
    """
    Return the top-level `files` array.

    Raises:
        FormatError: If the root is not an object or `files` is missing or not an array
    """
    if not isinstance(tree, dict):
        raise FormatError()

    files = tree.get(FILES_KEY)
    if not isinstance(files, list):
        raise FormatError()

    return files


def entry_path(entry: Any) -> Optional[str]:
    """The entry's `_path` string, or None if it has none."""
    if not isinstance(entry, dict):
        return None
    path = entry.get(PATH_KEY)
    return path if isinstance(path, str) else None


def detect_duplicates(tree: Any) -> Tuple[Set[str], List[Dict[str, Any]]]:
    """
    Walk `files` in document order and collect every repeated entry.

    The first entry with a given path is never reported; each later entry with
    that path is.

    Args:
        tree: Parsed manifest

    Returns:
        Tuple of (duplicate_paths, duplicate_entries)
    """
    seen: Set[str] = set()
    duplicate_paths: Set[str] = set()
    duplicates: List[Dict[str, Any]] = []

    for index, entry in enumerate(find_files_array(tree)):
        path = entry_path(entry)
        if path is None:
            continue
        if path in seen:
            logger.debug(f"files[{index}] repeats {path}")
            duplicate_paths.add(path)
            duplicates.append(entry)
        else:
            seen.add(path)

    return duplicate_paths, duplicates


def detect_duplicate_paths(tree: Any) -> Set[str]:
    return detect_duplicates(tree)[0]
