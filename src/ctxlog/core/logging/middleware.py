# src/ctxlog/core/logging/middleware.py
"""
Request context middleware for FastAPI / Starlette.

Purpose
-------
Each incoming HTTP request gets a fresh request id (uuid4) and the output format
chosen when the middleware was built. Both are stored as the ambient
RequestContext (see context.py) for everything the request triggers, so every
ctxlog line emitted while handling it is tagged with the id and rendered in
that format. The id is also returned to the client in the `X-Request-ID`
response header.

Usage
-----
Function form (what `init_logger` returns):

    app = FastAPI()
    app.middleware("http")(init_logger(output="json"))

Class form:

    app.add_middleware(RequestContextMiddleware, output="json")

How it works
------------
1. Build the RequestContext (new uuid4, or a trusted incoming id, see below).
2. Set it in the contextvar; Starlette runs the downstream app in a task
   created after that point, which copies the context, so route handlers,
   dependencies, background tasks and any task they spawn see it for as long
   as they run.
3. Await call_next(request); exceptions propagate to the framework unchanged.
4. Add the id header to the response and restore the previous context value.

Incoming ids
------------
By default the id is always freshly generated. With
CTXLOG_TRUST_REQUEST_ID_HEADER=true an incoming id header that parses as a UUID
is reused (normalized); anything else is ignored, so arbitrary header values
never reach the logs.
"""

from __future__ import annotations

import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ctxlog.config.settings import Settings, get_settings

from .context import OutputFormat, RequestContext, reset_request_context, set_request_context

CallNext = Callable[[Request], Awaitable[Response]]


def _resolve_request_id(request: Request, settings: Settings) -> str:
    if settings.TRUST_REQUEST_ID_HEADER:
        incoming = request.headers.get(settings.REQUEST_ID_HEADER)
        if incoming:
            try:
                return str(uuid.UUID(incoming))
            except ValueError:
                pass
    return str(uuid.uuid4())


def init_logger(
    output: OutputFormat | str | None = None,
    *,
    settings: Settings | None = None,
) -> Callable[[Request, CallNext], Awaitable[Response]]:
    """
    Build the request context middleware function.

    Args:
        output: "text" or "json" (any casing) or an OutputFormat. None uses
                settings.OUTPUT_FORMAT, which defaults to "text".
        settings: Settings to use; defaults to get_settings().

    Returns:
        async def context_middleware(request, call_next) -> Response

    Raises:
        InvalidOutputFormatError: if `output` is not a known format.
    """
    if settings is None:
        settings = get_settings()
    output_format = OutputFormat.parse(output if output is not None else settings.OUTPUT_FORMAT)
    header = settings.REQUEST_ID_HEADER

    async def context_middleware(request: Request, call_next: CallNext) -> Response:
        context = RequestContext(_resolve_request_id(request, settings), output_format)
        token = set_request_context(context)
        try:
            response = await call_next(request)
            response.headers[header] = context.request_id
            return response
        finally:
            reset_request_context(token)

    return context_middleware


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Class form of init_logger() for `app.add_middleware(...)`.

    Register it early (before routers that emit logs).
    """

    def __init__(
        self,
        app: ASGIApp,
        output: OutputFormat | str | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(app, dispatch=init_logger(output, settings=settings))
