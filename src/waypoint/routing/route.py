"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from waypoint._internal.types import Handler
from waypoint.routing.patterns import CompiledMatcher, compile_pattern


class MatchStatus(Enum):
    """Three-valued result of evaluating one route against a request."""

    PATH_MISS = "path-miss"
    METHOD_MISS = "method-miss"
    MATCH = "match"


def normalize_methods(methods: str | Iterable[str] | None) -> frozenset[str] | None:
    """Normalize a method filter. ``None`` (or empty) means any method."""
    if methods is None:
        return None
    if isinstance(methods, str):
        methods = [methods]
    normalized = frozenset(m.strip().upper() for m in methods if m.strip())
    return normalized or None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``pattern`` of ``None``, ``""`` or ``"*"`` matches every path.
    ``methods`` of ``None`` matches every method; a string or iterable
    of strings is normalized to an upper-case frozenset.

    The pattern is compiled on construction, so a malformed pattern
    fails here with ``PatternSyntaxError``.
    """

    handler: Handler
    pattern: str | None = None
    methods: frozenset[str] | None = None
    count_match: bool = True
    name: str | None = None
    # Compiled from pattern when not supplied; never None after __post_init__
    matcher: CompiledMatcher = field(default=None, compare=False, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "methods", normalize_methods(self.methods))
        if self.matcher is None:
            object.__setattr__(self, "matcher", compile_pattern(self.pattern))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.handler(*args, **kwargs)

    def allows(self, method: str, *, head_matches_get: bool = True) -> bool:
        """Whether *method* satisfies this route's method filter."""
        if self.methods is None:
            return True
        method = method.upper()
        if method in self.methods:
            return True
        return head_matches_get and method == "HEAD" and "GET" in self.methods

    def evaluate(
        self, method: str, path: str, *, head_matches_get: bool = True
    ) -> "RouteMatch":
        """Match *path* first, then *method*.

        The method filter is only consulted when the path matched.
        """
        params = self.matcher.match(path)
        if params is None:
            return RouteMatch(route=self, status=MatchStatus.PATH_MISS, params={})
        if not self.allows(method, head_matches_get=head_matches_get):
            return RouteMatch(route=self, status=MatchStatus.METHOD_MISS, params=params)
        return RouteMatch(route=self, status=MatchStatus.MATCH, params=params)

    def describe(self) -> str:
        methods = ", ".join(sorted(self.methods)) if self.methods else "*"
        description = f"{methods} {self.pattern or '*'}"
        if self.name:
            description += f" [name={self.name!r}]"
        return description


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of evaluating one route against a (method, path) pair."""

    route: Route
    status: MatchStatus
    params: dict[str | int, str]

    @property
    def path_matched(self) -> bool:
        return self.status is not MatchStatus.PATH_MISS
