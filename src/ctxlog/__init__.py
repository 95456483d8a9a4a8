"""
ctxlog: request-scoped logging.

    from fastapi import FastAPI
    from ctxlog import init_logger, Logger, logger

    app = FastAPI()
    app.middleware("http")(init_logger(output="text"))

    log = Logger({"module": "orders"})

    @app.get("/orders")
    async def orders():
        log.info("listing orders")       # ... [<request id>] <module=orders> [INFO]: listing orders
        return []

    logger.info("outside of a request")  # ... [INFO]: outside of a request
"""

__version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .exceptions import (
    CtxLogError,
    InvalidLevelError,
    InvalidMetadataError,
    InvalidOutputFormatError,
)
from .core.logging import (
    Level,
    Logger,
    OutputFormat,
    RequestContext,
    RequestContextMiddleware,
    current,
    establish,
    establish_async,
    get_request_id,
    init_logger,
    logger,
    request_context,
    setup_logging,
)

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "CtxLogError",
    "InvalidLevelError",
    "InvalidMetadataError",
    "InvalidOutputFormatError",
    "Level",
    "Logger",
    "OutputFormat",
    "RequestContext",
    "RequestContextMiddleware",
    "current",
    "establish",
    "establish_async",
    "get_request_id",
    "init_logger",
    "logger",
    "request_context",
    "setup_logging",
]
