# src/ctxlog/core/logging/context.py
"""
Ambient request context.

One `contextvars.ContextVar` holds the `RequestContext` (request id + output
format) of the logical request currently being processed. It is set once at
request entry (see middleware.py) and read by the logging filter on every log
call, so nothing has to pass the request id around explicitly.

Why contextvars
---------------
- Each asyncio task runs in its own copy of the context, taken when the task is
  created. Concurrent requests therefore never see each other's value, and a
  task spawned while a request is being handled keeps that request's context
  for its whole life, even after the handler returned.
- Values survive `await`: the context belongs to the task, not the thread.
- Setting a value returns a token; resetting with it restores the previous value,
  which gives correct shadowing for nested requests.

Thread pools are the exception: `loop.run_in_executor` does not carry the context
over. Use `asyncio.to_thread` (which copies it) or
`contextvars.copy_context().run(...)` when logging from worker threads.

Entry points
------------
- establish(ctx, fn, *args)              sync; runs fn in an isolated copy of the context
- await establish_async(ctx, fn, *args)  async; awaits fn(*args) with ctx active
- with request_context(ctx): ...         block form, sync or async, within one task
- set_request_context / reset_request_context   low-level token API
- current() / get_request_id()           read side
"""

from __future__ import annotations

import contextvars
import inspect
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Iterator, TypeVar

from ctxlog.exceptions import InvalidOutputFormatError

T = TypeVar("T")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"

    @classmethod
    def parse(cls, value: "str | OutputFormat") -> "OutputFormat":
        """Accept an OutputFormat or its name in any casing."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidOutputFormatError(value) from None


@dataclass(frozen=True)
class RequestContext:
    """Identity and output mode of one logical request. Immutable."""

    request_id: str
    output_format: OutputFormat = OutputFormat.TEXT

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "output_format", OutputFormat.parse(self.output_format))


# Default is None to indicate "no request in progress" (standalone rendering).
_request_context: contextvars.ContextVar[RequestContext | None] = contextvars.ContextVar(
    "ctxlog_request_context", default=None
)


def current() -> RequestContext | None:
    """Return the request context of the calling execution, or None."""
    return _request_context.get()


def get_request_id() -> str | None:
    ctx = _request_context.get()
    return ctx.request_id if ctx is not None else None


def set_request_context(context: RequestContext | None) -> contextvars.Token:
    """
    Make `context` active in the current execution context.

    Returns:
        token: pass it to reset_request_context() to restore the previous value.
    """
    return _request_context.set(context)


def reset_request_context(token: contextvars.Token) -> None:
    _request_context.reset(token)


@contextmanager
def request_context(context: RequestContext) -> Iterator[RequestContext]:
    """
    Block form of establish():

        with request_context(RequestContext("abc")):
            logger.info("inside")   # tagged with [abc]

    Enter and exit must happen in the same task (a token cannot be reset from
    another context).
    """
    token = _request_context.set(context)
    try:
        yield context
    finally:
        _request_context.reset(token)


def establish(context: RequestContext, body: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Run `body(*args, **kwargs)` with `context` as the ambient request context.

    The call runs inside a copy of the caller's context, so the value is
    dropped when body returns and the caller's own value (if any) is never
    touched. Exceptions from body propagate unchanged.

    body must be synchronous. An awaitable result would run later in the
    awaiting task's context, without `context`, so it raises TypeError; use
    establish_async() for coroutine functions.
    """

    def _run() -> T:
        _request_context.set(context)
        result = body(*args, **kwargs)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise TypeError(
                f"establish() got an awaitable from {body!r}; use establish_async() instead"
            )
        return result

    return contextvars.copy_context().run(_run)


async def establish_async(
    context: RequestContext,
    body: Callable[..., Awaitable[T]],
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Await `body(*args, **kwargs)` with `context` as the ambient request context.

    Tasks created inside body (asyncio.create_task, TaskGroup, gather) copy the
    context when they are created and keep observing `context` until they finish,
    even if that is after establish_async returned. The previous value is
    restored for the awaiting task once body completes or raises.
    """
    token = _request_context.set(context)
    try:
        return await body(*args, **kwargs)
    finally:
        _request_context.reset(token)
