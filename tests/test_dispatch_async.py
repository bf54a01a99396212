"""Tests for Dispatcher.dispatch_async — awaiting handlers and timeouts."""

import anyio
import pytest

from waypoint.config import RouterConfig
from waypoint.dispatch.context import STOP
from waypoint.dispatch.dispatcher import Dispatcher
from waypoint.dispatch.outcome import Failed, Handled, MethodNotAllowed, NotFound
from waypoint.errors import StopDispatch
from waypoint.routing.route import Route
from waypoint.routing.table import RouteTable


def _dispatcher(*routes: Route, config: RouterConfig | None = None) -> Dispatcher:
    table = RouteTable(config)
    for route in routes:
        table.add(route)
    table.freeze()
    return Dispatcher(table)


@pytest.mark.anyio
async def test_mixed_sync_and_async_handlers() -> None:
    calls: list[str] = []

    def setup(params, context):
        calls.append("setup")
        context.shared["greeting"] = "hello"

    async def endpoint(params, context):
        await anyio.sleep(0)
        calls.append("endpoint")
        return f"{context.shared['greeting']} {params['name']}"

    d = _dispatcher(Route(setup, None, count_match=False), Route(endpoint, "/hi/[:name]", "GET"))
    outcome = await d.dispatch_async("GET", "/hi/alice")
    assert calls == ["setup", "endpoint"]
    assert isinstance(outcome, Handled)
    assert outcome.value == "hello alice"
    assert outcome.matched_count == 1


@pytest.mark.anyio
async def test_async_stop_signal() -> None:
    calls: list[str] = []

    async def first(params, context):
        calls.append("first")
        return STOP

    async def second(params, context):
        calls.append("second")

    d = _dispatcher(Route(first, "/a"), Route(second, "/a"))
    outcome = await d.dispatch_async("GET", "/a")
    assert calls == ["first"]
    assert isinstance(outcome, Handled)
    assert outcome.stopped is True


@pytest.mark.anyio
async def test_async_stop_exception() -> None:
    async def first(params, context):
        raise StopDispatch

    async def second(params, context):
        return "unreachable"

    outcome = await _dispatcher(Route(first, "/a"), Route(second, "/a")).dispatch_async("GET", "/a")
    assert isinstance(outcome, Handled)
    assert outcome.output == ()


@pytest.mark.anyio
async def test_async_failure() -> None:
    async def broken(params, context):
        raise KeyError("missing")

    outcome = await _dispatcher(Route(broken, "/a")).dispatch_async("GET", "/a")
    assert isinstance(outcome, Failed)
    assert isinstance(outcome.error, KeyError)


@pytest.mark.anyio
async def test_handler_timeout() -> None:
    async def slow(params, context):
        await anyio.sleep(5)

    async def after(params, context):
        return "unreachable"

    d = _dispatcher(
        Route(slow, "/a"),
        Route(after, "/a"),
        config=RouterConfig(handler_timeout=0.01),
    )
    outcome = await d.dispatch_async("GET", "/a")
    assert isinstance(outcome, Failed)
    assert isinstance(outcome.error, TimeoutError)
    assert outcome.output == ()


@pytest.mark.anyio
async def test_fast_handler_within_timeout() -> None:
    async def fast(params, context):
        return "done"

    d = _dispatcher(Route(fast, "/a"), config=RouterConfig(handler_timeout=5))
    outcome = await d.dispatch_async("GET", "/a")
    assert isinstance(outcome, Handled)
    assert outcome.value == "done"


@pytest.mark.anyio
async def test_async_not_found_and_method_not_allowed() -> None:
    async def handler(params, context):
        return "x"

    d = _dispatcher(Route(handler, "/a", "POST"))
    assert isinstance(await d.dispatch_async("POST", "/b"), NotFound)
    assert isinstance(await d.dispatch_async("GET", "/a"), MethodNotAllowed)


@pytest.mark.anyio
async def test_handle_async_request() -> None:
    class FakeRequest:
        def method(self) -> str:
            return "PUT"

        def path(self) -> str:
            return "/items/9"

    async def put_item(params, context):
        return params["id"]

    d = _dispatcher(Route(put_item, "/items/[i:id]", "PUT"))
    outcome = await d.handle_async(FakeRequest())
    assert isinstance(outcome, Handled)
    assert outcome.value == "9"
