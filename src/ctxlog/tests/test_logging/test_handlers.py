# src/ctxlog/tests/test_logging/test_handlers.py
import io
import logging

from ctxlog.core.logging.handlers import ConsoleSinkHandler, get_console_handler
from ctxlog.core.logging.levels import SILLY_LEVEL


class CountingStream(io.StringIO):
    def __init__(self):
        super().__init__()
        self.writes = 0

    def write(self, s):
        self.writes += 1
        return super().write(s)


def make_record(level, msg="line"):
    return logging.LogRecord("ctxlog", level, __file__, 1, msg, (), None)


def test_error_goes_to_stderr_everything_else_to_stdout(capsys):
    handler = ConsoleSinkHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    for level in (logging.WARNING, logging.INFO, logging.DEBUG, SILLY_LEVEL):
        handler.handle(make_record(level))
    handler.handle(make_record(logging.ERROR, "bad"))

    captured = capsys.readouterr()
    assert captured.err == "ERROR bad\n"
    assert captured.out.splitlines() == ["WARNING line", "INFO line", "DEBUG line", "SILLY line"]


def test_one_write_per_record(monkeypatch):
    stream = CountingStream()
    monkeypatch.setattr("sys.stdout", stream)
    handler = ConsoleSinkHandler()
    handler.handle(make_record(logging.INFO, "one"))
    handler.handle(make_record(logging.INFO, "two"))
    assert stream.writes == 2
    assert stream.getvalue() == "one\ntwo\n"


def test_stream_is_resolved_at_emit_time(monkeypatch):
    handler = ConsoleSinkHandler()
    first, second = io.StringIO(), io.StringIO()
    monkeypatch.setattr("sys.stdout", first)
    handler.handle(make_record(logging.INFO, "a"))
    monkeypatch.setattr("sys.stdout", second)
    handler.handle(make_record(logging.INFO, "b"))
    assert first.getvalue() == "a\n"
    assert second.getvalue() == "b\n"


def test_write_failure_does_not_raise(monkeypatch):
    class BrokenStream:
        def write(self, s):
            raise OSError("closed")

        def flush(self):
            pass

    monkeypatch.setattr("sys.stdout", BrokenStream())
    monkeypatch.setattr(logging, "raiseExceptions", False)
    ConsoleSinkHandler().handle(make_record(logging.INFO))


def test_get_console_handler_config():
    cfg = get_console_handler()
    assert cfg["()"] is ConsoleSinkHandler
    assert cfg["formatter"] == "request_scoped"
    assert cfg["filters"] == ["request_context"]
