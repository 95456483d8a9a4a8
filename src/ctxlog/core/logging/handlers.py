# src/ctxlog/core/logging/handlers.py
"""
Console sink handler and its dictConfig factory.

ERROR records go to standard error, everything else to standard output. The
stream is looked up on every emit instead of being captured when the handler is
created, so redirecting sys.stdout / sys.stderr later (pytest capture,
contextlib.redirect_stdout, a supervisor swapping streams) is honored.

Each record is written with a single `write` call (line + newline) followed by
a flush: no buffering, and a line is never split across two writes.
"""

import logging
import sys
from logging import LogRecord
from typing import TextIO


class ConsoleSinkHandler(logging.Handler):
    """
    Write formatted records to stdout, or stderr for ERROR and above.

    Failures while writing are reported through logging.Handler.handleError
    (controlled by logging.raiseExceptions), never raised into the caller.
    """

    terminator = "\n"

    def __init__(self, level: int | str = logging.NOTSET, error_level: int = logging.ERROR) -> None:
        super().__init__(level)
        self.error_level = error_level

    def stream_for(self, record: LogRecord) -> TextIO:
        return sys.stderr if record.levelno >= self.error_level else sys.stdout

    def emit(self, record: LogRecord) -> None:
        try:
            line = self.format(record)
            stream = self.stream_for(record)
            stream.write(line + self.terminator)
            stream.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def get_console_handler() -> dict:
    """
    Return the dictConfig handler entry for the console sink.

    - "()": factory for the handler (our class, not a "class" string, since it
      takes custom constructor kwargs).
    - "formatter": must match the name registered in builder.make_dict_config.
    - "filters": "request_context" stamps the ambient RequestContext on records.
    - "level": handler threshold; the logger level from settings already filters,
      so the handler lets everything through.
    """
    return {
        "()": ConsoleSinkHandler,
        "formatter": "request_scoped",
        "filters": ["request_context"],
        "level": "NOTSET",
    }
