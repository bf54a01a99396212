"""Shared type aliases used across waypoint modules."""

from collections.abc import Callable
from typing import Any, Protocol, TypeAlias

# Route handler, called as handler(params, context)
Handler: TypeAlias = Callable[..., Any]

# Captured path parameters: names for named captures, positions otherwise
Params: TypeAlias = dict[str | int, str]


class Request(Protocol):
    """The minimal request surface the dispatcher consumes."""

    def method(self) -> str: ...

    def path(self) -> str: ...
