"""Dispatch — ordered multi-match handler invocation and its outcomes."""

from waypoint.dispatch.context import CONTINUE, STOP, DispatchContext, Signal
from waypoint.dispatch.dispatcher import Dispatcher
from waypoint.dispatch.outcome import (
    DispatchOutcome,
    Failed,
    Handled,
    MethodNotAllowed,
    NotFound,
)

__all__ = [
    "CONTINUE",
    "STOP",
    "DispatchContext",
    "DispatchOutcome",
    "Dispatcher",
    "Failed",
    "Handled",
    "MethodNotAllowed",
    "NotFound",
    "Signal",
]
