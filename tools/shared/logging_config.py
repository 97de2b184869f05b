"""Stderr and debug-file logging for changelog-notes tools."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from tools.shared.colors import Colors
from tools.shared.config import get_logging_settings

logger = logging.getLogger(__name__)

# Set once the root logger has a debug-file handler
_file_logging_configured = False


class ColorFormatter(logging.Formatter):
    """Prefix each message with its level tag, colored when Colors allows it."""

    LEVEL_PREFIXES = {
        logging.DEBUG: ('[DEBUG]', 'CYAN'),
        logging.INFO: ('[INFO]', 'GREEN'),
        logging.WARNING: ('[WARN]', 'YELLOW'),
        logging.ERROR: ('[ERROR]', 'RED'),
        logging.CRITICAL: ('[CRITICAL]', 'RED'),
    }

    def format(self, record):
        tag, color = self.LEVEL_PREFIXES.get(record.levelno, ('[LOG]', 'NC'))
        return f"{getattr(Colors, color)}{tag}{Colors.NC} {record.getMessage()}"


def setup_logging(name, verbose=False, quiet=False, config=None):
    """Attach a colored stderr handler to logger ``name`` and set its level.

    Repeated calls reuse the existing handler. DEBUG with verbose, WARNING
    with quiet, INFO otherwise. A config dict is forwarded to
    configure_file_logging(), so ValueError from a bad logging section
    propagates to the caller.
    """
    log = logging.getLogger(name)

    if not log.handlers:
        Colors.auto(sys.stderr)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorFormatter())
        log.addHandler(handler)

    if verbose:
        log.setLevel(logging.DEBUG)
    elif quiet:
        log.setLevel(logging.WARNING)
    else:
        log.setLevel(logging.INFO)

    if config is not None:
        configure_file_logging(config)

    return log


def configure_file_logging(config):
    """Send every logger's records to a rotating plain-text debug log.

    Only acts when the config's ``logging.enabled`` is true, and only once
    per process. A file that cannot be opened is reported and skipped.

    Returns:
        The RotatingFileHandler, or None when nothing was attached.

    Raises:
        ValueError: If the logging section is malformed (see get_logging_settings()).
    """
    global _file_logging_configured

    settings = get_logging_settings(config)
    if not settings.enabled or _file_logging_configured:
        return None

    try:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            settings.file,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        logger.error("Debug log disabled, cannot open %s: %s", settings.file, e)
        return None

    handler.setLevel(settings.level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    root = logging.getLogger()
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > settings.level:
        root.setLevel(settings.level)

    _file_logging_configured = True
    logger.debug("Debug log: %s", settings.file)
    return handler
