"""
Core pytest configuration for the ctxlog test suite.

Every test starts from a clean slate:
  - CTXLOG_* environment variables are removed and the cached Settings dropped,
    so a developer's shell or .env never changes test outcomes;
  - the `ctxlog` logger is rewired with default settings (colors off, to keep
    assertions readable; tests that check colors ask for them).

Tests that need different settings use the `configure_logging` factory fixture.
"""

from __future__ import annotations

import os
import logging
from typing import Callable

import pytest

from ctxlog.config.settings import Settings, get_settings
from ctxlog.core.logging.builder import LOGGER_NAME, configure_sink_logger


def make_settings(**overrides) -> Settings:
    # _env_file=None: never read a stray .env during tests
    values = {"COLOR": False}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    """
    Remove CTXLOG_* variables, reset the settings cache and reinstall logging.
    """
    for name in list(os.environ):
        if name.startswith("CTXLOG_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    configure_sink_logger(make_settings())

    yield

    get_settings.cache_clear()
    sink = logging.getLogger(LOGGER_NAME)
    for handler in list(sink.handlers):
        sink.removeHandler(handler)


@pytest.fixture()
def configure_logging() -> Callable[..., Settings]:
    """
    Factory fixture: configure_logging(LOG_LEVEL="info", COLOR=True) rewires the
    `ctxlog` logger with those settings and returns them.
    """

    def _configure(**overrides) -> Settings:
        settings = make_settings(**overrides)
        configure_sink_logger(settings)
        return settings

    return _configure
