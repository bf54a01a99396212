"""Dispatch outcomes.

Every dispatch pass returns exactly one of these values. None of them is
raised: mapping an outcome to a 404, 405 or 500 response is the caller's
decision. ``status`` is an advisory HTTP status for that mapping.
"""

from dataclasses import dataclass, field
from typing import Any

from waypoint._internal.types import Params


@dataclass(frozen=True, slots=True)
class Handled:
    """At least one handler completed and none failed.

    ``handled_count`` counts the counting routes whose handler completed.
    When it is 0 only non-counting routes (setup, catch-all) ran;
    ``allowed`` then tells a not-found apart from a method mismatch.
    ``Router`` applies that policy; a bare ``Dispatcher`` leaves it to
    the caller.
    """

    matched_count: int
    params: Params = field(default_factory=dict)
    output: tuple[Any, ...] = ()
    stopped: bool = False
    shared: dict[str, Any] = field(default_factory=dict)
    handled_count: int = 0
    allowed: frozenset[str] = frozenset()

    status = 200

    @property
    def value(self) -> Any:
        """The last non-signal value a handler returned, or ``None``."""
        return self.output[-1] if self.output else None


@dataclass(frozen=True, slots=True)
class NotFound:
    """No route's path matched the request."""

    method: str
    path: str

    status = 404


@dataclass(frozen=True, slots=True)
class MethodNotAllowed:
    """A route's path matched, but no matching route accepts the method."""

    method: str
    path: str
    allowed: frozenset[str]

    status = 405

    @property
    def allow_header(self) -> str:
        """Value for an ``Allow`` response header."""
        return ", ".join(sorted(self.allowed))


@dataclass(frozen=True, slots=True)
class Failed:
    """A handler raised. ``error`` is the original exception, not re-raised."""

    error: BaseException
    matched_count: int = 0
    params: Params = field(default_factory=dict)
    output: tuple[Any, ...] = ()

    status = 500


type DispatchOutcome = Handled | NotFound | MethodNotAllowed | Failed
