# src/ctxlog/core/logging/logger.py
"""
Metadata-bearing logger handles.

    from ctxlog import Logger, logger

    log = Logger("payments")                  # -> <payments>
    log = Logger({"file": "api.py", "n": 0})  # -> <file=api.py | n=0>
    log.info("charged", amount, customer)

    logger.warn("no tag at all")              # process-wide default, empty metadata

A handle only stores its metadata (read-only, fixed at construction). The
request context is looked up on every call, so one handle can be created at
import time and shared by any number of concurrent requests.
"""

from __future__ import annotations

import logging
from numbers import Number
from types import MappingProxyType
from typing import Any, Mapping

from ctxlog.exceptions import InvalidMetadataError

from .builder import ensure_logging
from .formatters import render_message
from .levels import Level, level_name, levelno_for

# Logger.<level>() -> _emit() -> logging.Logger.log(): report the caller of <level>()
_STACKLEVEL = 3


def _normalize_meta(tag: Any) -> dict[str, Any]:
    if tag is None:
        return {}
    # bool is a Number too; 0, False and "" are kept (presence is not truthiness)
    if isinstance(tag, (str, Number)):
        return {"str": str(tag)}
    if isinstance(tag, Mapping):
        return dict(tag)
    raise InvalidMetadataError(tag)


class Logger:
    """
    Logger bound to a fixed metadata mapping.

    Args:
        tag: None (no metadata), a scalar shorthand (str / number, stored as
             {"str": str(tag)}) or a mapping (copied, insertion order kept).

    Raises:
        InvalidMetadataError: for any other tag type.
    """

    __slots__ = ("_meta",)

    def __init__(self, tag: str | int | float | Mapping[str, Any] | None = None) -> None:
        self._meta = MappingProxyType(_normalize_meta(tag))

    @property
    def meta(self) -> Mapping[str, Any]:
        return self._meta

    def __repr__(self) -> str:
        return f"Logger(meta={dict(self._meta)!r})"

    def _emit(self, level: Level | str, args: tuple) -> None:
        sink = ensure_logging()
        levelno = levelno_for(level)
        if not sink.isEnabledFor(levelno):
            return
        sink.log(
            levelno,
            render_message(args),
            extra={"ctx_level": level_name(level), "ctx_meta": self._meta},
            stacklevel=_STACKLEVEL,
        )

    def log(self, level: Level | str, *args: Any) -> None:
        """Log at `level`, given by name in any casing."""
        self._emit(level, args)

    def error(self, *args: Any) -> None:
        self._emit(Level.ERROR, args)

    def warn(self, *args: Any) -> None:
        self._emit(Level.WARN, args)

    def info(self, *args: Any) -> None:
        self._emit(Level.INFO, args)

    def http(self, *args: Any) -> None:
        self._emit(Level.HTTP, args)

    def verbose(self, *args: Any) -> None:
        self._emit(Level.VERBOSE, args)

    def debug(self, *args: Any) -> None:
        self._emit(Level.DEBUG, args)

    def silly(self, *args: Any) -> None:
        self._emit(Level.SILLY, args)


# Process-wide default: empty metadata, created once at import.
logger = Logger()
