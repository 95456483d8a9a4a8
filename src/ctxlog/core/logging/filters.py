# src/ctxlog/core/logging/filters.py
"""
Logging filters

RequestContextFilter attaches the ambient RequestContext (see context.py) to
every `logging.LogRecord` passing through a handler, so the formatter can pick
the output shape without touching the contextvar itself.

How it is intended to be used
------------------------------
Install the filter on the handler in the dictConfig (builder.py does this):

     "filters": {"request_context": {"()": RequestContextFilter}},
     "handlers": {"console": {..., "filters": ["request_context"]}}

Handlers run synchronously in the thread and task that made the log call,
so `current()` here returns exactly the context of the caller.

Behavior
--------
- If the record already has `request_context` (passed via `extra=`), keep it.
- Otherwise use the ambient value, which is None outside of a request.
- Always return True; the filter annotates, it never drops records.
"""

import logging
from logging import LogRecord

from .context import current


class RequestContextFilter(logging.Filter):
    def filter(self, record: LogRecord) -> bool:
        if not hasattr(record, "request_context"):
            record.request_context = current()
        return True
