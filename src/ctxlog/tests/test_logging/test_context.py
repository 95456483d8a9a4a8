# src/ctxlog/tests/test_logging/test_context.py
import asyncio
import contextvars
import dataclasses

import pytest

from ctxlog.core.logging.context import (
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
from ctxlog.exceptions import InvalidOutputFormatError


def test_no_context_by_default():
    assert current() is None
    assert get_request_id() is None


def test_request_context_is_immutable_and_normalized():
    ctx = RequestContext("abc", "JSON")
    assert ctx.output_format is OutputFormat.JSON
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.request_id = "other"


def test_request_context_defaults_to_text():
    assert RequestContext("abc").output_format is OutputFormat.TEXT


def test_request_context_rejects_unknown_format():
    with pytest.raises(InvalidOutputFormatError):
        RequestContext("abc", "xml")


def test_establish_runs_body_with_context_and_returns_result():
    ctx = RequestContext("abc")

    def body(x, y=0):
        assert current() is ctx
        return x + y

    assert establish(ctx, body, 1, y=2) == 3
    assert current() is None


def test_establish_visible_at_any_depth():
    def level3():
        return get_request_id()

    def level2():
        return level3()

    def level1():
        return level2()

    assert establish(RequestContext("deep"), level1) == "deep"


def test_establish_propagates_exceptions_without_leaking():
    def body():
        raise KeyError("boom")

    with pytest.raises(KeyError):
        establish(RequestContext("abc"), body)
    assert current() is None


def test_establish_rejects_coroutine_functions():
    ran = []

    async def handler():
        ran.append(get_request_id())

    with pytest.raises(TypeError, match="establish_async"):
        establish(RequestContext("abc"), handler)
    assert ran == []
    assert current() is None


def test_establish_nested_shadows_and_restores():
    seen = []

    def inner():
        seen.append(get_request_id())

    def outer():
        seen.append(get_request_id())
        establish(RequestContext("inner"), inner)
        seen.append(get_request_id())

    establish(RequestContext("outer"), outer)
    assert seen == ["outer", "inner", "outer"]


def test_request_context_block_restores_previous():
    with request_context(RequestContext("a")):
        assert get_request_id() == "a"
        with request_context(RequestContext("b")):
            assert get_request_id() == "b"
        assert get_request_id() == "a"
    assert current() is None


def test_token_api_round_trip():
    token = set_request_context(RequestContext("tok"))
    try:
        assert get_request_id() == "tok"
    finally:
        reset_request_context(token)
    assert current() is None


def test_establish_does_not_leak_into_copied_sibling_context():
    sibling = contextvars.copy_context()
    establish(RequestContext("mine"), lambda: None)
    assert sibling.run(current) is None


@pytest.mark.asyncio
async def test_establish_async_survives_suspension():
    async def body():
        await asyncio.sleep(0)
        first = get_request_id()
        await asyncio.sleep(0.01)
        return first, get_request_id()

    assert await establish_async(RequestContext("sleepy"), body) == ("sleepy", "sleepy")
    assert current() is None


@pytest.mark.asyncio
async def test_establish_async_restores_on_error():
    async def body():
        await asyncio.sleep(0)
        raise RuntimeError("fail")

    with pytest.raises(RuntimeError):
        await establish_async(RequestContext("x"), body)
    assert current() is None


@pytest.mark.asyncio
async def test_spawned_task_keeps_context_after_body_returns():
    release = asyncio.Event()
    seen = []

    async def background():
        await release.wait()
        seen.append(get_request_id())

    async def body():
        return asyncio.create_task(background())

    task = await establish_async(RequestContext("bg"), body)
    # the establishing call has returned; the task still belongs to "bg"
    assert current() is None
    release.set()
    await task
    assert seen == ["bg"]


@pytest.mark.asyncio
async def test_concurrent_requests_are_isolated():
    a_started = asyncio.Event()
    b_done = asyncio.Event()
    seen = {}

    async def branch_a():
        seen["a_before"] = get_request_id()
        a_started.set()
        await b_done.wait()
        seen["a_after"] = get_request_id()

    async def branch_b():
        await a_started.wait()
        seen["b"] = get_request_id()
        b_done.set()

    await asyncio.gather(
        establish_async(RequestContext("A"), branch_a),
        establish_async(RequestContext("B"), branch_b),
    )
    assert seen == {"a_before": "A", "b": "B", "a_after": "A"}


@pytest.mark.asyncio
async def test_nested_request_inside_task_restores_outer():
    seen = []

    async def inner():
        await asyncio.sleep(0)
        seen.append(get_request_id())

    async def outer():
        seen.append(get_request_id())
        await asyncio.create_task(establish_async(RequestContext("B"), inner))
        await establish_async(RequestContext("C"), inner)
        seen.append(get_request_id())

    await establish_async(RequestContext("A"), outer)
    assert seen == ["A", "B", "C", "A"]


@pytest.mark.asyncio
async def test_to_thread_carries_context():
    async def body():
        return await asyncio.to_thread(get_request_id)

    assert await establish_async(RequestContext("thread"), body) == "thread"
