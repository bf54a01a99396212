"""Validation result — immutable container for a checked value and its errors."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of running a chain of checks against one value.

    The result is falsy when invalid, so you can write::

        result = context.validate_param("slug", "alnum", ("len", 3, 40))
        if not result:
            return STOP
    """

    value: str | None
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
