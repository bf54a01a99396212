"""Reverse path generation from a parsed pattern.

``build_path`` substitutes placeholders with the string form of the
matching parameter. An optional group is dropped from the output as a
whole if any placeholder inside it has no value.
"""

from collections.abc import Mapping
from typing import Any

from waypoint.errors import MissingParameterError
from waypoint.routing.patterns import Literal, OptionalGroup, Placeholder, Token


class _Absent(Exception):  # noqa: N818
    """A placeholder in the current group has no value."""

    def __init__(self, key: str | int) -> None:
        self.key = key


def _render(tokens: tuple[Token, ...], params: Mapping[Any, Any]) -> str:
    parts: list[str] = []
    for token in tokens:
        if isinstance(token, Literal):
            parts.append(token.text)
        elif isinstance(token, Placeholder):
            value = params.get(token.key)
            if value is None:
                raise _Absent(token.key)
            parts.append(str(value))
        elif isinstance(token, OptionalGroup):
            try:
                parts.append(_render(token.tokens, params))
            except _Absent:
                continue
    return "".join(parts)


def build_path(name: str, tokens: tuple[Token, ...], params: Mapping[Any, Any]) -> str:
    """Render *tokens* with *params*.

    Raises ``MissingParameterError`` when a placeholder outside any
    optional group has no value. *name* is only used in that error.
    """
    try:
        return _render(tokens, params)
    except _Absent as exc:
        raise MissingParameterError(name, exc.key) from None
