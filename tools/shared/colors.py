"""ANSI color utilities for log prefixes."""

import os
import sys


class Colors:
    """ANSI color codes for terminal output."""
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    CYAN = '\033[0;36m'
    NC = '\033[0m'  # No Color

    @classmethod
    def disable(cls):
        """Blank out every code so formatted output is plain text."""
        for name in ('RED', 'GREEN', 'YELLOW', 'CYAN', 'NC'):
            setattr(cls, name, '')

    @classmethod
    def auto(cls, stream=None):
        """Disable colors if stream (default stderr) is not a TTY or NO_COLOR is set."""
        stream = stream if stream is not None else sys.stderr
        isatty = getattr(stream, 'isatty', None)
        if os.environ.get('NO_COLOR') or not (isatty and isatty()):
            cls.disable()
