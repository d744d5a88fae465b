"""
ANSI color helpers

Colors are off when stdout is not a TTY or NO_COLOR is set; FORCE_COLOR
turns them on regardless of the TTY check.
"""

import sys
from taskflow.config.settings import settings


def _enabled() -> bool:
    if settings.NO_COLOR:
        return False
    return settings.FORCE_COLOR or sys.stdout.isatty()


RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
GRAY = "\033[90m"

ENABLED = _enabled()


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text"""
    if not ENABLED or not styles:
        return text
    return "".join(styles) + text + RESET
