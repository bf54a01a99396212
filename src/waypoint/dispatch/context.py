"""Per-pass dispatch state.

A ``DispatchContext`` is created fresh for every dispatch pass and
handed by reference to each handler invoked during that pass. It must
never be retained or shared across passes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from waypoint._internal.types import Params

if TYPE_CHECKING:
    from waypoint.routing.route import Route
    from waypoint.validation import CheckSpec, ValidationResult, ValidatorRegistry


class Signal(Enum):
    """Values a handler returns to steer the pass."""

    CONTINUE = "continue"
    STOP = "stop"


CONTINUE = Signal.CONTINUE
STOP = Signal.STOP


@dataclass(slots=True)
class DispatchContext:
    """Mutable state shared by every handler in one dispatch pass.

    ``params`` accumulates captures across all routes matched so far;
    later matches overwrite earlier keys. ``shared`` is a free-form bag
    handlers use to pass data down the chain. ``output`` collects every
    value returned by a handler that was not a signal.
    """

    method: str
    path: str
    params: Params = field(default_factory=dict)
    matched_count: int = 0
    stopped: bool = False
    error: BaseException | None = None
    output: list[Any] = field(default_factory=list)
    shared: dict[str, Any] = field(default_factory=dict)
    route: "Route | None" = None
    invoked: int = 0
    handled_count: int = 0
    allowed: set[str] = field(default_factory=set)
    validators: "ValidatorRegistry | None" = None

    def stop(self) -> None:
        """Stop the pass once the running handler returns."""
        self.stopped = True

    def validate_param(self, name: str | int, *checks: "CheckSpec") -> "ValidationResult":
        """Validate the captured parameter *name* against *checks*.

        A missing parameter is checked as the empty string.
        """
        if self.validators is None:
            from waypoint.validation import ValidatorRegistry

            self.validators = ValidatorRegistry()
        return self.validators.validate(self.params.get(name), *checks)
