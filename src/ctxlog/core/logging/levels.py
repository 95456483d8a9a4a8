# src/ctxlog/core/logging/levels.py
"""
Severity levels and their terminal colors.

The ordering is error > warn > info > http > verbose > debug > silly. Each level
maps onto a stdlib numeric level so records can travel through `logging`
handlers and thresholds; the three levels stdlib does not know about (http,
verbose, silly) are registered with `logging.addLevelName`.

Level names are case-insensitive everywhere: "INFO", "info" and "Info" are the
same level. Unknown names never break a log call: they get no color and are
emitted at INFO's numeric level.
"""

import logging
from enum import Enum

from ctxlog.exceptions import InvalidLevelError


class Level(str, Enum):
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    HTTP = "http"
    VERBOSE = "verbose"
    DEBUG = "debug"
    SILLY = "silly"

    @property
    def levelno(self) -> int:
        return LEVEL_NUMBERS[self]


HTTP_LEVEL = 18
VERBOSE_LEVEL = 15
SILLY_LEVEL = 5

LEVEL_NUMBERS: dict[Level, int] = {
    Level.ERROR: logging.ERROR,
    Level.WARN: logging.WARNING,
    Level.INFO: logging.INFO,
    Level.HTTP: HTTP_LEVEL,
    Level.VERBOSE: VERBOSE_LEVEL,
    Level.DEBUG: logging.DEBUG,
    Level.SILLY: SILLY_LEVEL,
}

logging.addLevelName(HTTP_LEVEL, "HTTP")
logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")
logging.addLevelName(SILLY_LEVEL, "SILLY")


# Foreground colors (SGR 30-37, 90 = bright black / grey).
COLOR_CODES: dict[str, str] = {
    "error": "\033[31m",     # red
    "warn": "\033[33m",      # yellow
    "info": "\033[32m",      # green
    "http": "\033[35m",      # magenta
    "verbose": "\033[36m",   # cyan
    "debug": "\033[34m",     # blue
    "silly": "\033[90m",     # grey
}
RESET = "\033[0m"


def level_name(level: "str | Level") -> str:
    """Lowercase name of `level`, whether given as a `Level` or a plain string."""
    if isinstance(level, Level):
        return level.value
    return str(level).strip().lower()


def color_for(level: "str | Level") -> str:
    """Return the ANSI color code for `level` (any casing), or "" if unknown."""
    return COLOR_CODES.get(level_name(level), "")


def parse_level(value: "str | Level") -> Level:
    """
    Parse a level name in any casing into a `Level`.

    Raises:
        InvalidLevelError: if the name is not one of the seven known levels.
    """
    if isinstance(value, Level):
        return value
    try:
        return Level(level_name(value))
    except ValueError:
        raise InvalidLevelError(value) from None


def levelno_for(level: "str | Level") -> int:
    """Numeric stdlib level for `level`; unknown names fall back to INFO."""
    try:
        return parse_level(level).levelno
    except InvalidLevelError:
        return logging.INFO
