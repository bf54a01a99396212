"""Ordered multi-match dispatcher.

Walks the route table in registration order and invokes the handler of
every route whose path and method both match. This is deliberately not
"first match wins": earlier, general routes can set up shared state for
later, specific ones, and any handler can end the pass early.

Handlers are called as ``handler(params, context)`` and steer the pass
by what they return or raise:

- ``None`` or ``CONTINUE`` — carry on with the next route
- ``STOP`` or ``raise StopDispatch`` — no further handler runs
- ``raise SkipRoute`` — abandon this handler, carry on; it does not count as handled
- any other value — recorded as output, carry on
- any other exception — the pass ends with a ``Failed`` outcome
"""

import inspect
import logging
from typing import Any

from waypoint._internal.invoke import invoke
from waypoint._internal.types import Request
from waypoint.config import RouterConfig
from waypoint.dispatch.context import CONTINUE, STOP, DispatchContext
from waypoint.dispatch.outcome import (
    DispatchOutcome,
    Failed,
    Handled,
    MethodNotAllowed,
    NotFound,
)
from waypoint.errors import SkipRoute, StopDispatch
from waypoint.routing.route import MatchStatus, Route
from waypoint.routing.table import RouteTable
from waypoint.validation import ValidatorRegistry

logger = logging.getLogger("waypoint.dispatch")


class Dispatcher:
    """Dispatch (method, path) pairs against a route table.

    The table is only read. Each call creates its own context, so
    concurrent calls are safe once the table is frozen.

    Usage::

        dispatcher = Dispatcher(table)
        outcome = dispatcher.dispatch("GET", "/posts/42")
        match outcome:
            case Handled(output=output): ...
            case MethodNotAllowed() as denied: ...  # denied.allow_header
            case NotFound(): ...
            case Failed(error=error): ...
    """

    __slots__ = ("_config", "_table", "_validators")

    def __init__(
        self,
        table: RouteTable,
        *,
        config: RouterConfig | None = None,
        validators: ValidatorRegistry | None = None,
    ) -> None:
        self._table = table
        self._config = config or table.config
        self._validators = validators

    @property
    def table(self) -> RouteTable:
        return self._table

    # -- Public API --

    def dispatch(self, method: str, path: str) -> DispatchOutcome:
        """Run one synchronous dispatch pass.

        Handlers returning an awaitable fail the pass with ``TypeError``;
        use ``dispatch_async`` for ``async def`` handlers.
        """
        context = self._new_context(method, path)
        for route in self._table.all():
            if context.stopped or context.error is not None:
                break
            if not self._select(context, route):
                continue
            try:
                result = route.handler(context.params, context)
                if inspect.isawaitable(result):
                    _discard(result)
                    msg = (
                        f"Handler {_handler_name(route)} returned an awaitable; "
                        "use dispatch_async() for async handlers."
                    )
                    raise TypeError(msg)
            except Exception as exc:
                self._fail(context, route, exc)
            else:
                self._settle(context, route, result)
        return self._finish(context)

    async def dispatch_async(self, method: str, path: str) -> DispatchOutcome:
        """Run one dispatch pass, awaiting async handlers.

        Each handler runs under ``RouterConfig.handler_timeout`` when set;
        an overrun fails the pass with ``TimeoutError``.
        """
        context = self._new_context(method, path)
        timeout = self._config.handler_timeout
        for route in self._table.all():
            if context.stopped or context.error is not None:
                break
            if not self._select(context, route):
                continue
            try:
                result = await invoke(route.handler, context.params, context, timeout=timeout)
            except Exception as exc:
                self._fail(context, route, exc)
            else:
                self._settle(context, route, result)
        return self._finish(context)

    def handle(self, request: Request) -> DispatchOutcome:
        """Dispatch a request object exposing ``method()`` and ``path()``."""
        return self.dispatch(request.method(), request.path())

    async def handle_async(self, request: Request) -> DispatchOutcome:
        return await self.dispatch_async(request.method(), request.path())

    # -- Internal --

    def _new_context(self, method: str, path: str) -> DispatchContext:
        return DispatchContext(
            method=method.upper(), path=path, validators=self._validators
        )

    def _select(self, context: DispatchContext, route: Route) -> bool:
        """Evaluate *route* and update the context. True if its handler should run."""
        match = route.evaluate(
            context.method, context.path, head_matches_get=self._config.head_matches_get
        )
        if self._config.debug:
            logger.debug(
                "%s %s: %s -> %s", context.method, context.path, route.describe(), match.status.value
            )
        if match.status is MatchStatus.PATH_MISS:
            return False

        if route.count_match:
            context.matched_count += 1

        if match.status is MatchStatus.METHOD_MISS:
            methods = route.methods or frozenset()
            context.allowed.update(methods)
            if self._config.head_matches_get and "GET" in methods:
                context.allowed.add("HEAD")
            return False

        context.params.update(match.params)
        context.route = route
        return True

    def _complete(self, context: DispatchContext, route: Route) -> None:
        """Record a handler that ran to completion."""
        context.invoked += 1
        if route.count_match:
            context.handled_count += 1

    def _settle(self, context: DispatchContext, route: Route, result: Any) -> None:
        self._complete(context, route)
        if result is STOP:
            context.stopped = True
        elif result is not None and result is not CONTINUE:
            context.output.append(result)

    def _fail(self, context: DispatchContext, route: Route, exc: Exception) -> None:
        if isinstance(exc, StopDispatch):
            self._complete(context, route)
            context.stopped = True
            return
        if isinstance(exc, SkipRoute):
            return
        context.error = exc
        logger.warning(
            "Handler %s failed on %s %s",
            _handler_name(route),
            context.method,
            context.path,
            exc_info=exc,
        )

    def _finish(self, context: DispatchContext) -> DispatchOutcome:
        outcome: DispatchOutcome
        if context.error is not None:
            outcome = Failed(
                error=context.error,
                matched_count=context.matched_count,
                params=dict(context.params),
                output=tuple(context.output),
            )
        elif context.invoked:
            outcome = Handled(
                matched_count=context.matched_count,
                params=dict(context.params),
                output=tuple(context.output),
                stopped=context.stopped,
                shared=context.shared,
                handled_count=context.handled_count,
                allowed=frozenset(context.allowed),
            )
        elif context.allowed:
            outcome = MethodNotAllowed(
                method=context.method, path=context.path, allowed=frozenset(context.allowed)
            )
        else:
            outcome = NotFound(method=context.method, path=context.path)

        logger.debug(
            "%s %s -> %s (%d invoked, %d matched)",
            context.method,
            context.path,
            type(outcome).__name__,
            context.invoked,
            context.matched_count,
        )
        return outcome


def _handler_name(route: Route) -> str:
    return getattr(route.handler, "__qualname__", repr(route.handler))


def _discard(awaitable: Any) -> None:
    """Close an un-awaited coroutine so it does not warn on collection."""
    close = getattr(awaitable, "close", None)
    if close is not None:
        close()
