#!/usr/bin/env python3
"""
Extract release notes for a specific version from changelog.md.

Finds the "## VERSION ..." heading and prints everything from that heading
up to the next "## " heading. When no heading matches, prints a pointer to
the online changelog instead.

Usage:
    python -m tools.release.extract_changelog 0.23.0
    python -m tools.release.extract_changelog 0.23.0 --changelog path/to/changelog.md
    python -m tools.release.extract_changelog --list

Exit codes:
    0 - Notes (or the fallback pointer) printed to stdout
    1 - Changelog could not be read, or the config is invalid
    2 - Usage error
"""

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

from tools.shared.config import (
    DEFAULT_CHANGELOG,
    FALLBACK_NOTES,
    get_changelog_settings,
    load_config,
)
from tools.shared.logging_config import configure_file_logging, setup_logging

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^## (\S+)", re.MULTILINE)


def _section_pattern(version: str) -> "re.Pattern[str]":
    # Heading, literal token, then a separator so "1.2" never hits "1.2.3"
    return re.compile(
        rf"^## {re.escape(version)}(?=[ \t\r\n]|\Z).*?(?=\n## |\Z)",
        re.MULTILINE | re.DOTALL,
    )


def extract_section(document: str, version: str, fallback: str = FALLBACK_NOTES) -> str:
    """Return the section for ``version`` from a changelog document.

    Args:
        document: Full changelog text.
        version: Version token, matched literally (e.g., "0.23.0").
        fallback: Text returned when no heading matches.

    Returns:
        The section text including its heading line, stripped of
        leading/trailing whitespace, or ``fallback`` if not found.
        When a version appears under more than one heading the first wins.

    Raises:
        ValueError: If version is empty.
    """
    if not version or not version.strip():
        raise ValueError("Version must be a non-empty string")

    match = _section_pattern(version).search(document)
    if match is None:
        return fallback
    return match.group(0).strip()


def list_versions(document: str) -> List[str]:
    """Return the version token of every section heading, in document order."""
    return HEADING_RE.findall(document)


def read_changelog(changelog_path: Path) -> str:
    """Read a changelog as UTF-8.

    Raises:
        FileNotFoundError: If changelog_path does not exist.
        OSError: If the file cannot be read.
    """
    return changelog_path.read_text(encoding="utf-8")


def extract_release_notes(
    version: str,
    changelog_path: Path,
    fallback: str = FALLBACK_NOTES,
) -> str:
    """Read ``changelog_path`` and extract the notes for ``version``."""
    text = read_changelog(changelog_path)
    logger.debug("Read %d characters from %s", len(text), changelog_path)
    return extract_section(text, version, fallback)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print the changelog section for a release version.",
    )
    parser.add_argument("version", nargs="?", help="Version to extract (e.g., 0.23.0)")
    parser.add_argument(
        "--changelog",
        help=f"Path to the changelog (default: config changelog.path or {DEFAULT_CHANGELOG})",
    )
    parser.add_argument("--list", action="store_true", help="List versions found in the changelog")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Show only warnings and errors")
    args = parser.parse_args(argv)

    if not args.list and not (args.version and args.version.strip()):
        parser.error("a non-empty VERSION is required unless --list is given")

    # Before load_config() so its errors get the same [ERROR] formatting
    for name in (__name__, "tools.shared"):
        setup_logging(name, verbose=args.verbose, quiet=args.quiet)

    config = load_config(fallback={})

    try:
        settings = get_changelog_settings(config)
        configure_file_logging(config)
    except ValueError as e:
        logger.error("Invalid config: %s", e)
        return 1

    changelog_path = Path(args.changelog).expanduser() if args.changelog else settings.path

    try:
        text = read_changelog(changelog_path)
    except FileNotFoundError:
        logger.error("Changelog not found: %s", changelog_path)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read %s: %s", changelog_path, e)
        return 1

    if args.list:
        for version in list_versions(text):
            print(version)
        return 0

    notes = extract_section(text, args.version, settings.fallback)
    if notes == settings.fallback:
        logger.warning("No section for version %s in %s", args.version, changelog_path)

    print(notes)
    return 0


if __name__ == "__main__":
    sys.exit(main())
