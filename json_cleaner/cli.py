#!/usr/bin/env python3
"""
Remove duplicate entries from a manifest's "files" array, keyed by "_path".

The first entry for each path is kept. Later entries are cut out of the
original text line by line, so comments and formatting elsewhere in the file
stay exactly as they were.

Usage:
    json-cleaner manifest.json cleaned.json
    json-cleaner manifest.json cleaned.json --dry-run   # Report only
    python -m json_cleaner manifest.json cleaned.json --verbose
"""

import argparse
import json
import logging
from collections import Counter
from pathlib import Path
from typing import List, Optional, Set

from .config import Settings, load_settings
from .detector import detect_duplicates, entry_path
from .errors import CleanerError, InputNotFoundError, ParseError, RemovalMismatchError, UsageError
from .jsonc import load_jsonc
from .remover import EntrySpan, find_removable_spans, remove_marked_spans

logger = logging.getLogger(__name__)


class CleanerArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = CleanerArgumentParser(
        prog="json-cleaner",
        description="Remove duplicate '_path' entries from a JSON manifest's 'files' array, "
                    "preserving comments and formatting."
    )
    parser.add_argument(
        'input_file',
        type=Path,
        help='Manifest to clean'
    )
    parser.add_argument(
        'output_file',
        type=Path,
        help='Where to write the cleaned manifest'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Report duplicates and the lines that would be removed without writing anything'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show each removed line range'
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format='%(message)s')
    logging.getLogger().setLevel(level)


def read_manifest(input_path: Path, encoding: str):
    """
    Read the manifest once.

    Returns:
        Tuple of (raw_bytes, text)

    Raises:
        InputNotFoundError: If the path does not exist
        ParseError: If the bytes are not valid text in `encoding`
    """
    if not input_path.exists():
        raise InputNotFoundError(input_path)

    raw = input_path.read_bytes()
    try:
        return raw, raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise ParseError(f"{input_path} is not valid {encoding}: {e}")


def check_spans(duplicates: List[dict], duplicate_paths: Set[str], spans: List[EntrySpan]) -> None:
    """
    Compare what the line scan would cut with what the parsed view found.

    Raises:
        RemovalMismatchError: If a span's path is not a detected duplicate, or a
            path would lose more entries than were detected as duplicates
    """
    remaining = Counter(entry_path(entry) for entry in duplicates)
    remaining.subtract(span.path for span in spans)

    over = sorted(path for path, count in remaining.items() if count < 0 or path not in duplicate_paths)
    if over:
        raise RemovalMismatchError(over)

    leftover = sorted(path for path, count in remaining.items() if count > 0)
    if leftover:
        logger.warning(f"⚠️  {len(leftover)} duplicate path(s) could not be removed line by line "
                       f"and are still repeated: {', '.join(leftover)}")


def clean_file(input_path: Path, output_path: Path, settings: Settings, dry_run: bool = False) -> int:
    """
    Detect and remove duplicate entries, writing the result once.

    Args:
        input_path: Manifest to read
        output_path: Destination for the cleaned manifest
        settings: Encoding and report settings
        dry_run: If True, report only and write nothing

    Returns:
        Number of entries removed (or that would be removed)

    Raises:
        CleanerError: On any input, parse or format problem; nothing is written
    """
    raw, text = read_manifest(input_path, settings.encoding)
    tree = load_jsonc(text)
    duplicate_paths, duplicates = detect_duplicates(tree)

    if not duplicates:
        logger.info("No duplicate assets found.")
        if dry_run:
            logger.info("[DRY RUN] No file written")
            return 0
        output_path.write_bytes(raw)
        logger.info(f"Cleaned JSON written to {output_path}")
        return 0

    logger.info(f"Found {len(duplicates)} duplicate assets. Removing:")
    for entry in duplicates:
        logger.info(json.dumps(entry, indent=settings.indent, ensure_ascii=False))

    spans = find_removable_spans(text, duplicate_paths)
    check_spans(duplicates, duplicate_paths, spans)

    if dry_run:
        for span in spans:
            logger.info(f"[DRY RUN] Would remove lines {span.removal_start + 1}-{span.end + 1}: {span.path}")
        logger.info(f"[DRY RUN] {len(spans)} entries would be removed, no file written")
        return len(spans)

    cleaned = remove_marked_spans(text, duplicate_paths, spans=spans)
    with open(output_path, 'w', encoding=settings.encoding, newline='') as f:
        f.write(cleaned)
    logger.info(f"Cleaned JSON written to {output_path}")
    return len(spans)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()

    try:
        args, extra = parser.parse_known_args(argv)
    except UsageError as e:
        configure_logging("INFO")
        logger.error(e.message)
        logger.error(parser.format_usage().strip())
        return 1

    try:
        settings = load_settings()
    except UsageError as e:
        configure_logging("INFO")
        logger.error(e.message)
        return 1

    configure_logging("DEBUG" if args.verbose else settings.log_level)
    if extra:
        logger.warning(f"⚠️  Ignoring extra arguments: {' '.join(extra)}")

    try:
        clean_file(args.input_file, args.output_file, settings, dry_run=args.dry_run)
    except CleanerError as e:
        logger.error(e.message)
        return 1
    except OSError as e:
        logger.error(f"✗ I/O error: {e}")
        return 1

    return 0


if __name__ == '__main__':
    exit(main())
