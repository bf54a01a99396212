"""Waypoint top-level router.

Mutable during setup (route registration, prefix groups, services,
validators). Frozen when ``freeze()`` is called or on the first dispatch.
"""

import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from waypoint._internal.types import Handler, Request
from waypoint.config import RouterConfig
from waypoint.dispatch.dispatcher import Dispatcher
from waypoint.dispatch.outcome import DispatchOutcome, Handled, MethodNotAllowed, NotFound
from waypoint.errors import FrozenError
from waypoint.routing.patterns import CATCH_ALL_PATTERNS
from waypoint.routing.route import Route
from waypoint.routing.table import RoutesView, RouteTable, join_prefix
from waypoint.services import ServiceRegistry
from waypoint.validation import ValidatorRegistry


class Router:
    """The waypoint router.

    Usage::

        router = Router()

        @router.route()                        # every request, not counted
        def load_user(params, ctx):
            ctx.shared["user"] = current_user()

        @router.route("/posts/[i:id]", methods="GET", name="post")
        def show_post(params, ctx):
            return render_post(params["id"])

        outcome = router.dispatch("GET", "/posts/42")
        router.path_for("post", {"id": 42})    # "/posts/42"

    Thread safety:
        The setup phase is single-threaded. The freeze transition uses a
        Lock + double-check so exactly one thread freezes the table, even
        when several threads dispatch their first request concurrently.
    """

    __slots__ = (
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_prefixes",
        "config",
        "services",
        "table",
        "validators",
    )

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        services: ServiceRegistry | None = None,
        validators: ValidatorRegistry | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.table: RouteTable = RouteTable(self.config)
        self.services: ServiceRegistry = services or ServiceRegistry()
        # Default checks are populated here, once per router
        self.validators: ValidatorRegistry = validators or ValidatorRegistry()
        self._prefixes: list[str] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._dispatcher = Dispatcher(
            self.table, config=self.config, validators=self.validators
        )

    # -- Route registration --

    def add(
        self,
        handler: Handler,
        pattern: str | None = None,
        methods: str | Iterable[str] | None = None,
        *,
        count_match: bool | None = None,
        name: str | None = None,
    ) -> Route:
        """Register *handler* and return the stored route.

        *count_match* defaults to False for catch-all patterns (``None``,
        ``""``, ``"*"``) and True otherwise, so setup routes that run on
        every request do not mask a not-found.
        """
        self._check_not_frozen()
        if count_match is None:
            count_match = (pattern or "") not in CATCH_ALL_PATTERNS
        if self._prefixes:
            pattern = join_prefix("".join(self._prefixes), pattern)
        route = Route(
            handler=handler,
            pattern=pattern,
            methods=methods,
            count_match=count_match,
            name=name,
        )
        return self.table.add(route)

    def route(
        self,
        pattern: str | None = None,
        *,
        methods: str | Iterable[str] | None = None,
        count_match: bool | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            pattern: Path pattern, e.g. ``/posts/[i:id]``. ``None`` or
                ``"*"`` matches every path.
            methods: One method or several. ``None`` accepts any method.
            count_match: Whether a path match counts towards
                ``matched_count``. See ``add``.
            name: Optional route name for ``path_for``.
        """

        def decorator(func: Handler) -> Handler:
            self.add(func, pattern, methods, count_match=count_match, name=name)
            return func

        return decorator

    def add_group(self, prefix: str, routes: Iterable[Route]) -> list[Route]:
        """Add prebuilt *routes* under *prefix*, preserving their order."""
        self._check_not_frozen()
        return self.table.add_group("".join(self._prefixes) + prefix, routes)

    @contextmanager
    def group(self, prefix: str) -> Iterator["Router"]:
        """Prefix every route registered inside the block::

            with router.group("/admin"):
                router.add(dashboard, "/", "GET")     # /admin/
                with router.group("/users"):
                    router.add(users, "/", "GET")     # /admin/users/
        """
        self._check_not_frozen()
        self._prefixes.append(prefix.rstrip("/"))
        try:
            yield self
        finally:
            self._prefixes.pop()

    # -- Lookup --

    @property
    def routes(self) -> RoutesView:
        return self.table.all()

    def path_for(self, name: str, params: Mapping[Any, Any] | None = None) -> str:
        return self.table.path_for(name, params)

    # -- Dispatch --

    def dispatch(self, method: str, path: str) -> DispatchOutcome:
        """Run one dispatch pass.

        A pass in which only non-counting routes completed is reported as
        ``MethodNotAllowed`` when some route matched the path but not the
        method, and as ``NotFound`` otherwise.
        """
        self.freeze()
        return _demote_uncounted(self._dispatcher.dispatch(method, path), method, path)

    async def dispatch_async(self, method: str, path: str) -> DispatchOutcome:
        self.freeze()
        outcome = await self._dispatcher.dispatch_async(method, path)
        return _demote_uncounted(outcome, method, path)

    def handle(self, request: Request) -> DispatchOutcome:
        return self.dispatch(request.method(), request.path())

    async def handle_async(self, request: Request) -> DispatchOutcome:
        return await self.dispatch_async(request.method(), request.path())

    # -- Internal --

    def freeze(self) -> None:
        """Thread-safe freeze with double-check locking. Idempotent."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self.table.freeze()
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has started dispatching. "
                "Register routes before the first dispatch or freeze()."
            )
            raise FrozenError(msg)


def _demote_uncounted(outcome: DispatchOutcome, method: str, path: str) -> DispatchOutcome:
    if not isinstance(outcome, Handled) or outcome.handled_count:
        return outcome
    method = method.upper()
    if outcome.allowed:
        return MethodNotAllowed(method=method, path=path, allowed=outcome.allowed)
    return NotFound(method=method, path=path)
