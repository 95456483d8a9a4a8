# src/ctxlog/core/logging/
# ├─ __init__.py            # public API re-exports
# ├─ levels.py              # Level enum, numeric levels, ANSI color table
# ├─ context.py             # RequestContext + contextvar helpers (establish, current, ...)
# ├─ formatters.py          # render_message, format_meta, render_line, RequestScopedFormatter
# ├─ filters.py             # RequestContextFilter
# ├─ handlers.py            # ConsoleSinkHandler (stdout / stderr)
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ logger.py              # Logger handles + default `logger`
# └─ middleware.py          # init_logger() / RequestContextMiddleware for FastAPI/Starlette


from .levels import Level
from .context import (
    OutputFormat,
    RequestContext,
    current,
    establish,
    establish_async,
    get_request_id,
    request_context,
    reset_request_context,
    set_request_context,
)
from .formatters import RequestScopedFormatter, format_meta, render_line, render_message
from .filters import RequestContextFilter
from .handlers import ConsoleSinkHandler
from .builder import make_dict_config, setup_logging
from .logger import Logger, logger
from .middleware import RequestContextMiddleware, init_logger

__all__ = [
    "Level",
    "OutputFormat",
    "RequestContext",
    "current",
    "establish",
    "establish_async",
    "get_request_id",
    "request_context",
    "reset_request_context",
    "set_request_context",
    "RequestScopedFormatter",
    "format_meta",
    "render_line",
    "render_message",
    "RequestContextFilter",
    "ConsoleSinkHandler",
    "make_dict_config",
    "setup_logging",
    "Logger",
    "logger",
    "RequestContextMiddleware",
    "init_logger",
]
