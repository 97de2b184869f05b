"""Configuration loading for changelog-notes tools."""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_PATH = Path.home() / ".changelog-notes" / "config.yaml"

DEFAULT_CHANGELOG = "changelog.md"
FALLBACK_NOTES = (
    "You can find the working changelog [here](https://www.uiua.org/docs/changelog)."
)

DEFAULT_LOG_FILE = "~/.changelog-notes/logs/debug.log"
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

logger = logging.getLogger(__name__)


@dataclass
class ChangelogSettings:
    """Resolved `changelog` section of the config."""
    path: Path
    fallback: str


@dataclass
class LoggingSettings:
    """Resolved `logging` section of the config."""
    enabled: bool
    level: int
    file: Path
    max_bytes: int
    backup_count: int


def load_config(
    required: bool = False,
    fallback: Optional[Dict[str, Any]] = None
) -> Optional[Dict[str, Any]]:
    """Load ~/.changelog-notes/config.yaml.

    Args:
        required: If True, exit with error when config is missing.
        fallback: Default dict to return when config is missing and not required.

    Returns:
        Parsed config dict, fallback dict, or None if missing/invalid.
    """
    if not CONFIG_PATH.exists():
        if required:
            logger.error("Config file not found at %s", CONFIG_PATH)
            sys.exit(1)
        return fallback

    try:
        with open(CONFIG_PATH, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        logger.error("Error reading config: %s", e)
        if required:
            sys.exit(1)
        return fallback

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.error("Config at %s must be a mapping, got %s", CONFIG_PATH, type(data).__name__)
        if required:
            sys.exit(1)
        return fallback
    return data


def get_changelog_settings(config: Optional[Dict[str, Any]] = None) -> ChangelogSettings:
    """Resolve changelog path and fallback text from a config dict.

    Args:
        config: Config dict from load_config(). None means all defaults.

    Returns:
        ChangelogSettings with defaults filled in.

    Raises:
        ValueError: If the changelog section or one of its values has the wrong type.
    """
    section = (config or {}).get("changelog") or {}
    if not isinstance(section, dict):
        raise ValueError("'changelog' must be a mapping")

    path = section.get("path", DEFAULT_CHANGELOG)
    if not isinstance(path, str) or not path:
        raise ValueError("'changelog.path' must be a non-empty string")

    fallback = section.get("fallback", FALLBACK_NOTES)
    if not isinstance(fallback, str):
        raise ValueError("'changelog.fallback' must be a string")

    return ChangelogSettings(path=Path(os.path.expanduser(path)), fallback=fallback)


def get_logging_settings(config: Optional[Dict[str, Any]] = None) -> LoggingSettings:
    """Resolve the optional debug-log section of a config dict.

    Args:
        config: Config dict from load_config(). None means logging disabled.

    Returns:
        LoggingSettings with defaults filled in.

    Raises:
        ValueError: If the logging section or one of its values has the wrong type.
    """
    section = (config or {}).get("logging") or {}
    if not isinstance(section, dict):
        raise ValueError("'logging' must be a mapping")

    enabled = section.get("enabled", False)
    if not isinstance(enabled, bool):
        raise ValueError("'logging.enabled' must be true or false")

    level_name = section.get("level", "debug")
    if not isinstance(level_name, str) or level_name.lower() not in LOG_LEVELS:
        raise ValueError(f"'logging.level' must be one of: {', '.join(LOG_LEVELS)}")

    log_file = section.get("file", DEFAULT_LOG_FILE)
    if not isinstance(log_file, str) or not log_file:
        raise ValueError("'logging.file' must be a non-empty string")

    max_size_mb = section.get("max_size_mb", 5)
    if isinstance(max_size_mb, bool) or not isinstance(max_size_mb, (int, float)) or max_size_mb <= 0:
        raise ValueError("'logging.max_size_mb' must be a positive number")

    backup_count = section.get("backup_count", 3)
    if isinstance(backup_count, bool) or not isinstance(backup_count, int) or backup_count < 0:
        raise ValueError("'logging.backup_count' must be a non-negative integer")

    return LoggingSettings(
        enabled=enabled,
        level=LOG_LEVELS[level_name.lower()],
        file=Path(os.path.expanduser(log_file)),
        max_bytes=int(max_size_mb * 1024 * 1024),
        backup_count=backup_count,
    )
