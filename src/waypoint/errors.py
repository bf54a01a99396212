"""Waypoint exception hierarchy.

Shared across the pattern compiler, route table, dispatcher, and service
registry so every module raises and catches the same types.

Configuration errors surface at setup time. Dispatch never raises for
"no route" or "wrong method": those are outcome values, see
``waypoint.dispatch.outcome``.
"""


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when the route table or router setup is invalid.

    Typically raised while routes are registered, before any request
    is dispatched.
    """


class PatternSyntaxError(ConfigurationError, ValueError):
    """A route pattern could not be compiled.

    Raised for unbalanced brackets, unknown placeholder type tags,
    unterminated ``[@...]`` expressions, and misplaced ``**`` wildcards.
    """

    def __init__(self, pattern: str, reason: str, position: int | None = None) -> None:
        self.pattern = pattern
        self.reason = reason
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Invalid route pattern {pattern!r}{where}: {reason}")


class DuplicateNameError(ConfigurationError):
    """A second route was registered under an existing name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A route named {name!r} is already registered.")


class FrozenError(ConfigurationError, RuntimeError):
    """The route table was modified after it was frozen."""


class RouteNotFoundError(WaypointError, LookupError):
    """No route is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No route named {name!r}.")


class MissingParameterError(WaypointError, KeyError):
    """A required placeholder has no value during reverse generation."""

    def __init__(self, route_name: str, param: str | int) -> None:
        self.route_name = route_name
        self.param = param
        super().__init__(route_name, param)

    def __str__(self) -> str:
        return f"Route {self.route_name!r} requires parameter {self.param!r}."


class DuplicateServiceError(ConfigurationError):
    """A service name was registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A service named {name!r} is already registered.")


class UnknownServiceError(WaypointError, LookupError):
    """A service was looked up that was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown service {name!r}.")


# -- Control flow ------------------------------------------------------------


class DispatchSignal(WaypointError):  # noqa: N818
    """Base for exceptions a handler raises to steer the dispatch pass.

    Signals are never stored as the pass's error and never produce a
    ``Failed`` outcome.
    """


class StopDispatch(DispatchSignal):
    """Stop the pass after the raising handler. No further handler runs."""


class SkipRoute(DispatchSignal):
    """Abandon the rest of the raising handler and continue with the next route."""
