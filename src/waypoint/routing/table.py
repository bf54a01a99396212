"""Ordered route table.

Routes are registered during setup, in order, and the table is frozen
before concurrent dispatch begins. Unlike a trie, the table keeps every
route in registration order: dispatch walks all of them and may invoke
several handlers for one request.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import replace
from typing import Any, overload

from waypoint.config import RouterConfig
from waypoint.errors import (
    ConfigurationError,
    DuplicateNameError,
    FrozenError,
    RouteNotFoundError,
)
from waypoint.routing.patterns import compile_pattern
from waypoint.routing.reverse import build_path
from waypoint.routing.route import Route

logger = logging.getLogger("waypoint.routing")

# Pattern openings that attach to a group prefix without a separating "/"
_ATTACHED_STARTS = ("/", "[", ".")


class RoutesView(Sequence[Route]):
    """A read-only, restartable view over the table's routes.

    Reflects routes added after the view was taken. Iterating twice
    walks the table twice.
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: list[Route]) -> None:
        self._routes = routes

    @overload
    def __getitem__(self, index: int) -> Route: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Route, ...]: ...

    def __getitem__(self, index: int | slice) -> Route | tuple[Route, ...]:
        if isinstance(index, slice):
            return tuple(self._routes[index])
        return self._routes[index]

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __repr__(self) -> str:
        return f"RoutesView({len(self._routes)} routes)"


def join_prefix(prefix: str, pattern: str | None) -> str:
    """Prepend *prefix* to *pattern*. A catch-all pattern becomes the prefix's subtree.

    A pattern opening with a literal segment gets a separating ``/``; one
    opening with ``/``, ``[`` or ``.`` is appended as is, so
    ``"[/[i:page]]"`` under ``"/posts"`` still matches ``/posts``.
    """
    prefix = prefix.rstrip("/")
    if pattern == "*":
        return f"{prefix}[/[**:path]]"
    if not pattern:
        return prefix or "/"
    if not pattern.startswith(_ATTACHED_STARTS):
        pattern = "/" + pattern
    return prefix + pattern


class RouteTable:
    """An ordered collection of routes.

    Usage::

        table = RouteTable()
        table.add(Route(show_post, "/posts/[i:id]", "GET", name="post"))
        table.add_group("/admin", [Route(dashboard, "/", "GET")])
        table.freeze()
        table.path_for("post", {"id": 42})  # "/posts/42"
    """

    __slots__ = ("_by_name", "_config", "_frozen", "_routes")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._routes: list[Route] = []
        self._by_name: dict[str, Route] = {}
        self._frozen = False

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._routes)

    def _compile(self, route: Route) -> Route:
        """Recompile *route* when the table's matching options differ from the defaults."""
        cfg = self._config
        if cfg.case_sensitive and not cfg.strict_slashes:
            return route
        matcher = compile_pattern(
            route.pattern,
            case_sensitive=cfg.case_sensitive,
            strict_slashes=cfg.strict_slashes,
        )
        return replace(route, matcher=matcher)

    def add(self, route: Route) -> Route:
        """Append *route*. Returns the route as stored.

        Raises ``DuplicateNameError`` if the route's name is taken and
        ``FrozenError`` after ``freeze()``.
        """
        if self._frozen:
            msg = "Cannot add routes after the route table is frozen."
            raise FrozenError(msg)
        if route.name and route.name in self._by_name:
            raise DuplicateNameError(route.name)

        route = self._compile(route)
        self._routes.append(route)
        if route.name:
            self._by_name[route.name] = route
        logger.debug("Registered route %s", route.describe())
        return route

    def add_group(self, prefix: str, routes: Iterable[Route]) -> list[Route]:
        """Add *routes* with *prefix* prepended to each pattern, preserving order.

        All or nothing: the whole group is prefixed, compiled and checked
        for name clashes before any route is appended.
        """
        if self._frozen:
            msg = "Cannot add routes after the route table is frozen."
            raise FrozenError(msg)
        prefixed = [
            replace(route, pattern=join_prefix(prefix, route.pattern), matcher=None)
            for route in routes
        ]
        names = set(self._by_name)
        for route in prefixed:
            if route.name:
                if route.name in names:
                    raise DuplicateNameError(route.name)
                names.add(route.name)
        return [self.add(route) for route in prefixed]

    def find_by_name(self, name: str) -> Route | None:
        return self._by_name.get(name)

    def all(self) -> RoutesView:
        """Return a read-only view of the routes in registration order."""
        return RoutesView(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def freeze(self) -> None:
        """Make the table read-only. Idempotent."""
        if not self._frozen:
            self._frozen = True
            logger.debug("Route table frozen with %d routes", len(self._routes))

    def path_for(self, name: str, params: Mapping[Any, Any] | None = None) -> str:
        """Generate the path for the route registered as *name*.

        Raises ``RouteNotFoundError`` for an unknown name and
        ``MissingParameterError`` when a required placeholder has no value.
        """
        route = self._by_name.get(name)
        if route is None:
            raise RouteNotFoundError(name)
        if route.matcher.matches_any:
            msg = f"Route {name!r} matches every path and cannot be reversed."
            raise ConfigurationError(msg)
        return build_path(name, route.matcher.tokens, params or {})
