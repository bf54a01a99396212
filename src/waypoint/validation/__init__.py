"""Parameter validation — named checks, clean results.

Usage::

    from waypoint.validation import ValidatorRegistry

    validators = ValidatorRegistry()

    def show_user(params, context):
        result = context.validate_param("id", "int", ("len", 1, 9))
        if not result:
            return STOP
"""

from waypoint.validation.registry import CheckSpec, ValidatorRegistry
from waypoint.validation.result import ValidationResult
from waypoint.validation.rules import Check

__all__ = [
    "Check",
    "CheckSpec",
    "ValidationResult",
    "ValidatorRegistry",
]
