"""Validator registry — a name-to-check table.

A registry is populated with the default checks once, when it is
constructed, and extended with custom checks at setup time. Checks are
referenced by name in a check spec::

    registry = ValidatorRegistry()
    registry.register("even", lambda v: None if int(v) % 2 == 0 else "Must be even")

    registry.validate("42", "int", "even", ("len", 1, 3))

Prefixing a name with ``not_`` inverts it: ``("not_contains", "..")``.
"""

from collections.abc import Iterable, Iterator
from typing import Any

from waypoint.errors import ConfigurationError
from waypoint.validation.result import ValidationResult
from waypoint.validation.rules import DEFAULT_CHECKS, Check, negate

# A check spec: a registered name, or (name, *args)
type CheckSpec = str | tuple[Any, ...]

_NEGATION_PREFIX = "not_"


class ValidatorRegistry:
    """Named string checks, each ``(value, *args) -> error message | None``."""

    __slots__ = ("_checks",)

    def __init__(self, *, defaults: bool = True) -> None:
        self._checks: dict[str, Check] = dict(DEFAULT_CHECKS) if defaults else {}

    def register(self, name: str, check: Check) -> None:
        """Add or replace the check called *name*."""
        if not name or name.startswith(_NEGATION_PREFIX):
            msg = f"Invalid validator name {name!r}."
            raise ConfigurationError(msg)
        self._checks[name] = check

    def get(self, name: str) -> Check:
        """Resolve *name*, including ``not_``-prefixed inversions."""
        check = self._checks.get(name)
        if check is not None:
            return check
        if name.startswith(_NEGATION_PREFIX):
            base = name.removeprefix(_NEGATION_PREFIX)
            if base in self._checks:
                return negate(base, self._checks[base])
        msg = f"Unknown validator {name!r}."
        raise ConfigurationError(msg)

    def __contains__(self, name: object) -> bool:
        return name in self._checks

    def __iter__(self) -> Iterator[str]:
        return iter(self._checks)

    def validate(self, value: Any, *checks: CheckSpec) -> ValidationResult:
        """Run every check in *checks* against *value*, collecting all errors.

        ``None`` is checked as the empty string.
        """
        text = "" if value is None else str(value)
        errors: list[str] = []
        for name, args in _expand(checks):
            error = self.get(name)(text, *args)
            if error is not None:
                errors.append(error)
        return ValidationResult(value=value, errors=tuple(errors))


def _expand(checks: Iterable[CheckSpec]) -> Iterator[tuple[str, tuple[Any, ...]]]:
    for spec in checks:
        if isinstance(spec, str):
            yield spec, ()
        else:
            name, *args = spec
            yield name, tuple(args)
