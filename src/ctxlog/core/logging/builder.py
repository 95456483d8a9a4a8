# src/ctxlog/core/logging/builder.py
"""
Logging builder: create and apply the dictConfig for the `ctxlog` logger.

Every ctxlog.Logger call ends up as a stdlib LogRecord on the `ctxlog` logger.
This module wires that logger to:

  - the "request_scoped" formatter (formatters.RequestScopedFormatter)
  - the "request_context" filter  (filters.RequestContextFilter)
  - the "console" handler         (handlers.ConsoleSinkHandler: stdout / stderr)

The logger does not propagate, so an application's own root configuration never
prints ctxlog lines twice, and `disable_existing_loggers` is False so applying
this config does not silence the application's loggers.

Configuration comes from Settings (LOG_LEVEL, COLOR). `setup_logging()` may be
called explicitly at application startup (it applies the dictConfig);
otherwise `ensure_logging()` wires the same chain onto the `ctxlog` logger on
the first log call.
"""

from __future__ import annotations

import logging
import logging.config
import threading

from ctxlog.config.settings import Settings, get_settings

from .filters import RequestContextFilter
from .formatters import RequestScopedFormatter
from .handlers import ConsoleSinkHandler, get_console_handler
from .levels import parse_level

LOGGER_NAME = "ctxlog"

_SETUP_LOCK = threading.Lock()


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "request_scoped"
      - filters: "request_context"
      - handlers: "console"
      - loggers: "ctxlog" (non-propagating)
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "request_scoped": {
                "()": RequestScopedFormatter,
                "color": settings.COLOR,
            },
        },
        "filters": {
            "request_context": {"()": RequestContextFilter},
        },
        "handlers": {
            "console": get_console_handler(),
        },
        "loggers": {
            LOGGER_NAME: {
                "handlers": ["console"],
                "level": parse_level(settings.LOG_LEVEL).levelno,
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings | None = None) -> None:
    """
    Apply the ctxlog logging configuration.

    Safe to call more than once (e.g. after changing settings in tests): the
    `ctxlog` logger's handlers are replaced, not duplicated.
    """
    if settings is None:
        settings = get_settings()
    with _SETUP_LOCK:
        logging.config.dictConfig(make_dict_config(settings))


def configure_sink_logger(settings: Settings) -> logging.Logger:
    """
    Wire the `ctxlog` logger directly, without going through dictConfig.

    Produces the same handler/formatter/filter chain as make_dict_config(), but
    leaves every other logger and handler in the process alone (dictConfig
    flushes and closes all existing handlers, which a library must not do
    behind the application's back).
    """
    handler = ConsoleSinkHandler()
    handler.setFormatter(RequestScopedFormatter(color=settings.COLOR))
    handler.addFilter(RequestContextFilter())

    sink = logging.getLogger(LOGGER_NAME)
    for old in list(sink.handlers):
        sink.removeHandler(old)
    sink.addHandler(handler)
    sink.setLevel(parse_level(settings.LOG_LEVEL).levelno)
    sink.propagate = False
    return sink


def ensure_logging() -> logging.Logger:
    """Return the `ctxlog` logger, configuring it first if nobody has."""
    sink = logging.getLogger(LOGGER_NAME)
    if not sink.handlers:
        with _SETUP_LOCK:
            if not sink.handlers:
                configure_sink_logger(get_settings())
    return sink
