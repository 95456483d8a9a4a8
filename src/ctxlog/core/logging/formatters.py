# src/ctxlog/core/logging/formatters.py
"""
Rendering of log lines.

Every line is rendered from the same inputs (level, metadata, message and the
ambient request context, if any) into one of three shapes:

  - no request context (startup code, scripts, background jobs):
        {color}2025-01-31 12:00:00.123 <file=app.py> [INFO]: hello{reset}

  - request context with output format "text":
        {color}2025-01-31 12:00:00.123 [9f1c...] <file=app.py> [INFO]: hello{reset}

  - request context with output format "json" (never colored):
        {"timestamp": "2025-01-31T11:00:00.123Z", "requestId": "9f1c...",
         "meta": {"file": "app.py"}, "level": "info", "message": "hello"}

Level names are upper-cased in text lines and lower-cased in JSON lines,
whatever casing the call site used.

The functions here are pure; `RequestScopedFormatter` adapts them to the
`logging.Formatter` interface so the dictConfig in builder.py can use them.
None of this code raises on odd input: values that cannot be inspected fall
back to `object.__repr__`, and metadata entries that cannot be encoded as JSON
(cycles, non-string keys, NaN) are replaced by their `str`.
"""

from __future__ import annotations

import json
import logging
import pprint
import sys
import time
import traceback
from datetime import datetime, timezone
from logging import LogRecord
from numbers import Number
from typing import Any, Iterable, Mapping

from .context import OutputFormat, RequestContext, current
from .levels import RESET, color_for, level_name

# How deep nested containers are shown before being cut to "...".
INSPECT_DEPTH = 4


def _fallback_repr(value: Any) -> str:
    return object.__repr__(value)


def render_value(value: Any) -> str:
    """
    Render one message argument for display.

    Strings and numbers are shown as-is. Exceptions are shown with their
    traceback when they have one. Anything else is inspected structurally with
    pprint, which cuts self-references to "<Recursion on ...>" instead of
    looping.
    """
    try:
        if isinstance(value, (str, Number)):
            return str(value)
        if isinstance(value, BaseException):
            return "".join(
                traceback.format_exception(type(value), value, value.__traceback__)
            ).rstrip("\n")
        return pprint.pformat(
            value, depth=INSPECT_DEPTH, width=sys.maxsize, compact=True, sort_dicts=False
        )
    except Exception:
        # broken __str__/__repr__, RecursionError on pathological nesting, ...
        return _fallback_repr(value)


def render_message(args: Iterable[Any]) -> str:
    """Render all message arguments and join them with single spaces."""
    return " ".join(render_value(a) for a in args)


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return _fallback_repr(value)


def format_meta(meta: Mapping[str, Any] | None) -> str:
    """
    Render the metadata prefix (including its trailing space).

      {}                      -> ""
      {"str": "x"}            -> "<x> "
      {"a": 1, "b": 0}        -> "<a=1 | b=0> "

    Emptiness is decided by key count: a key whose value is 0, False or ""
    is still rendered. Only a mapping whose single key is literally "str"
    gets the bare form; any other single-key mapping renders as key=value.
    """
    if meta is None or len(meta) == 0:
        return ""
    if len(meta) == 1 and "str" in meta:
        return f"<{_safe_str(meta['str'])}> "
    pairs = " | ".join(f"{key}={_safe_str(value)}" for key, value in meta.items())
    return f"<{pairs}> "


def _json_safe_meta(meta: Mapping[Any, Any]) -> dict:
    """
    Copy metadata into a dict json.dumps accepts with allow_nan=False.

    Values that encode cleanly (default=str included) are kept as they are;
    the rest become _safe_str(value). Non-string keys become _safe_str(key).
    """
    safe = {}
    for key, value in meta.items():
        if not isinstance(key, str):
            key = _safe_str(key)
        try:
            json.dumps(value, ensure_ascii=False, allow_nan=False, default=str)
        except Exception:
            # circular reference, non-str nested keys, NaN/inf, raising __str__
            value = _safe_str(value)
        safe[key] = value
    return safe


def format_text_timestamp(created: float) -> str:
    """Local time, millisecond precision: 2025-01-31 12:00:00.123"""
    return datetime.fromtimestamp(created).isoformat(sep=" ", timespec="milliseconds")


def format_iso_timestamp(created: float) -> str:
    """UTC ISO-8601, millisecond precision: 2025-01-31T11:00:00.123Z"""
    stamp = datetime.fromtimestamp(created, tz=timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def render_line(
    level: str,
    meta: Mapping[str, Any] | None,
    message: str,
    context: RequestContext | None,
    created: float | None = None,
    color: bool = True,
) -> str:
    """
    Build the final output line for one log call.

    Args:
        level: level name in any casing ("info", "INFO", Level.INFO).
        meta: metadata bound to the calling Logger (may be empty).
        message: already-rendered message text (see render_message).
        context: the ambient RequestContext, or None outside of a request.
        created: epoch seconds of the call; defaults to now.
        color: wrap text lines in ANSI color codes.
    """
    if created is None:
        created = time.time()
    name = level_name(level)
    meta = meta or {}

    if context is not None and context.output_format is OutputFormat.JSON:
        return json.dumps(
            {
                "timestamp": format_iso_timestamp(created),
                "requestId": context.request_id,
                "meta": _json_safe_meta(meta),
                "level": name,
                "message": message,
            },
            ensure_ascii=False,
            allow_nan=False,
            default=str,
        )

    start, end = (color_for(name), RESET) if color else ("", "")
    request_part = f"[{context.request_id}] " if context is not None else ""
    return (
        f"{start}{format_text_timestamp(created)} {request_part}"
        f"{format_meta(meta)}[{name.upper()}]: {message}{end}"
    )


class RequestScopedFormatter(logging.Formatter):
    """
    logging.Formatter that renders records with render_line().

    Records produced by ctxlog.Logger carry `ctx_level` and `ctx_meta`; the
    RequestContextFilter stamps `request_context` on them. Records from plain
    stdlib loggers routed to the same handler work too: they fall back to
    `levelname`, empty metadata and the context active at format time.
    """

    def __init__(self, color: bool = True) -> None:
        super().__init__()
        self.color = color

    def format(self, record: LogRecord) -> str:
        level = getattr(record, "ctx_level", None) or record.levelname
        meta = getattr(record, "ctx_meta", None) or {}
        if hasattr(record, "request_context"):
            context = record.request_context
        else:
            context = current()

        message = record.getMessage()
        if record.exc_info:
            message = message + "\n" + self.formatException(record.exc_info)

        return render_line(level, meta, message, context, created=record.created, color=self.color)
