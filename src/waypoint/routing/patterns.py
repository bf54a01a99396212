"""Route pattern compiler.

Turns a declarative path template into a reusable matcher::

    "/posts"                  literal path
    "/posts/[i:id]"           typed placeholder, captured as "id"
    "/posts[/[i:page]]"       optional group, may be absent entirely
    "/files/[**:rest]"        remainder of the path, slashes included
    "/archive/[@\\d{4}:year]" caller-supplied sub-expression
    "/legacy/[@[a-z]+\\.php]" unnamed, retrievable by position only

Literal text is escaped before it reaches the regex engine. A backslash
makes the next character literal (``\\[`` matches a ``[``).
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

from waypoint.errors import PatternSyntaxError

# Placeholder type tag -> regex for one capture
PLACEHOLDER_TYPES: dict[str, str] = {
    "": r"[^/]+",
    "i": r"[0-9]+",
    "a": r"[A-Za-z]+",
    "h": r"[0-9A-Fa-f]+",
    "s": r"[0-9A-Za-z_\-]+",
    "*": r"[^/]+",
    "**": r".+?",
}

# Patterns that match every path
CATCH_ALL_PATTERNS: frozenset[str] = frozenset({"", "*"})

_NAME_RE = re.compile(r"\w*")
_GROUP_PREFIX = "_wp"


@dataclass(frozen=True, slots=True)
class Literal:
    """Literal path text, matched verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A capture slot.

    ``type`` is the tag from ``PLACEHOLDER_TYPES`` or ``"@"`` for a
    caller-supplied expression. ``name`` is empty for positional
    captures, which are keyed by ``index``.
    """

    type: str
    name: str
    regex: str
    index: int

    @property
    def key(self) -> str | int:
        """The key this capture is stored under in the params mapping."""
        return self.name or self.index


@dataclass(frozen=True, slots=True)
class OptionalGroup:
    """A bracketed sub-pattern that may be absent as a whole."""

    tokens: tuple["Token", ...]


type Token = Literal | Placeholder | OptionalGroup


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """The compiled form of one pattern.

    ``names`` lists capture names in pattern order; positional captures
    have an empty name. ``regex`` is ``None`` for catch-all patterns.
    """

    pattern: str
    tokens: tuple[Token, ...]
    names: tuple[str, ...]
    regex: re.Pattern[str] | None

    @property
    def matches_any(self) -> bool:
        return self.regex is None

    def match(self, path: str) -> dict[str | int, str] | None:
        """Test *path*. Returns the captures on success, else ``None``.

        Named captures are keyed by name, positional ones by their
        0-based position among all captures in the pattern. Placeholders
        inside an absent optional group are left out.
        """
        if self.regex is None:
            return {}
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        captures: dict[str | int, str] = {}
        for index, name in enumerate(self.names):
            value = m.group(f"{_GROUP_PREFIX}{index}")
            if value is not None:
                captures[name or index] = value
        return captures


class _Parser:
    """Recursive-descent parser for one pattern string."""

    __slots__ = ("_index", "_names", "_pattern", "_pos", "_types")

    def __init__(self, pattern: str, types: dict[str, str]) -> None:
        self._pattern = pattern
        self._types = types
        self._pos = 0
        self._index = 0
        self._names: set[str] = set()

    def error(self, reason: str, position: int | None = None) -> PatternSyntaxError:
        return PatternSyntaxError(
            self._pattern, reason, self._pos if position is None else position
        )

    def parse(self) -> tuple[Token, ...]:
        tokens = self._sequence(group_start=None)
        _check_final_wildcard(tokens, self)
        return tokens

    def _sequence(self, group_start: int | None) -> tuple[Token, ...]:
        pattern = self._pattern
        tokens: list[Token] = []
        text: list[str] = []

        def flush() -> None:
            if text:
                tokens.append(Literal("".join(text)))
                text.clear()

        while self._pos < len(pattern):
            char = pattern[self._pos]
            if char == "\\":
                if self._pos + 1 == len(pattern):
                    raise self.error("dangling escape character")
                text.append(pattern[self._pos + 1])
                self._pos += 2
            elif char == "[":
                flush()
                tokens.append(self._bracket())
            elif char == "]":
                if group_start is None:
                    raise self.error("unmatched ']'")
                self._pos += 1
                flush()
                return tuple(tokens)
            else:
                text.append(char)
                self._pos += 1

        if group_start is not None:
            raise self.error("unbalanced '[' never closed", group_start)
        flush()
        return tuple(tokens)

    def _bracket(self) -> Token:
        start = self._pos
        self._pos += 1
        if self._pattern.startswith("@", self._pos):
            return self._expression(start)

        placeholder = self._placeholder(start)
        if placeholder is not None:
            return placeholder

        return OptionalGroup(self._sequence(group_start=start))

    def _placeholder(self, start: int) -> Placeholder | None:
        """Parse ``[type:name]`` at the cursor, or return ``None`` for a group."""
        pattern = self._pattern
        end = self._pos
        while end < len(pattern) and pattern[end] not in "[]":
            end += 1
        if end == len(pattern) or pattern[end] == "[":
            return None

        content = pattern[self._pos : end]
        if "/" in content or "\\" in content:
            return None
        if ":" in content:
            tag, _, name = content.partition(":")
            if tag not in self._types:
                raise self.error(f"unknown placeholder type {tag!r}", start)
            if not _NAME_RE.fullmatch(name):
                raise self.error(f"invalid placeholder name {name!r}", start)
        elif content in self._types:
            tag, name = content, ""
        else:
            return None

        self._pos = end + 1
        return self._capture(tag, name, self._types[tag], start)

    def _expression(self, start: int) -> Placeholder:
        """Parse ``[@body]`` or ``[@body:name]``; the body is inserted verbatim."""
        pattern = self._pattern
        pos = self._pos + 1
        body_start = pos
        depth = 0
        colon = -1
        while pos < len(pattern):
            char = pattern[pos]
            if char == "\\":
                pos += 2
                continue
            if char in "[(":
                depth += 1
            elif char == ")" or (char == "]" and depth > 0):
                depth -= 1
                if depth < 0:
                    raise self.error("unbalanced ')' in expression", pos)
            elif char == "]":
                break
            elif char == ":" and depth == 0:
                colon = pos
            pos += 1
        else:
            raise self.error("unterminated '[@' expression", start)

        body, name = pattern[body_start:pos], ""
        if colon >= 0 and re.fullmatch(r"\w+", pattern[colon + 1 : pos]):
            body, name = pattern[body_start:colon], pattern[colon + 1 : pos]
        if not body:
            raise self.error("empty '[@' expression", start)

        self._pos = pos + 1
        return self._capture("@", name, body, start)

    def _capture(self, tag: str, name: str, regex: str, start: int) -> Placeholder:
        if name:
            if name in self._names:
                raise self.error(f"duplicate placeholder name {name!r}", start)
            self._names.add(name)
        placeholder = Placeholder(type=tag, name=name, regex=regex, index=self._index)
        self._index += 1
        return placeholder


def _check_final_wildcard(tokens: tuple[Token, ...], parser: _Parser) -> None:
    """Reject anything following a ``**`` placeholder."""
    seen_rest = False
    for token in iter_tokens(tokens):
        if seen_rest:
            raise parser.error("'**' wildcard must be the last token in the pattern", None)
        if isinstance(token, Placeholder) and token.type == "**":
            seen_rest = True


def iter_tokens(tokens: tuple[Token, ...]) -> Iterator[Literal | Placeholder]:
    """Yield literals and placeholders in pattern order, flattening groups."""
    for token in tokens:
        if isinstance(token, OptionalGroup):
            yield from iter_tokens(token.tokens)
        else:
            yield token


def parse_pattern(
    pattern: str, types: dict[str, str] | None = None
) -> tuple[Token, ...]:
    """Parse a pattern string into its token tree.

    Raises ``PatternSyntaxError`` on malformed input.
    """
    return _Parser(pattern, PLACEHOLDER_TYPES if types is None else types).parse()


def _to_regex(tokens: tuple[Token, ...]) -> str:
    parts: list[str] = []
    for token in tokens:
        if isinstance(token, Literal):
            parts.append(re.escape(token.text))
        elif isinstance(token, Placeholder):
            parts.append(f"(?P<{_GROUP_PREFIX}{token.index}>{token.regex})")
        elif inner := _to_regex(token.tokens):
            parts.append(f"(?:{inner})?")
    return "".join(parts)


def _strip_trailing_slash(tokens: tuple[Token, ...]) -> tuple[Token, ...]:
    """Drop the pattern's own trailing ``/``, including one that ends a final optional group."""
    if not tokens:
        return tokens
    last = tokens[-1]
    if isinstance(last, Literal) and last.text.endswith("/"):
        text = last.text[:-1]
        return (*tokens[:-1], Literal(text)) if text else tokens[:-1]
    if isinstance(last, OptionalGroup):
        return (*tokens[:-1], OptionalGroup(_strip_trailing_slash(last.tokens)))
    return tokens


def compile_pattern(
    pattern: str | None,
    *,
    types: dict[str, str] | None = None,
    case_sensitive: bool = True,
    strict_slashes: bool = False,
) -> CompiledMatcher:
    """Compile *pattern* into a ``CompiledMatcher``.

    Pure: the same pattern, type table, and flags always produce an
    equivalent matcher. ``None``, ``""`` and ``"*"`` compile to a matcher
    that accepts every path.

    Unless *strict_slashes* is set, the matcher accepts the pattern with
    and without exactly one trailing ``/``.

    Raises ``PatternSyntaxError`` on malformed input.
    """
    pattern = pattern or ""
    if pattern in CATCH_ALL_PATTERNS:
        return CompiledMatcher(pattern=pattern, tokens=(), names=(), regex=None)

    parser = _Parser(pattern, PLACEHOLDER_TYPES if types is None else types)
    tokens = parser.parse()
    names = tuple(
        token.name for token in iter_tokens(tokens) if isinstance(token, Placeholder)
    )

    if strict_slashes:
        source = _to_regex(tokens)
    else:
        source = _to_regex(_strip_trailing_slash(tokens)) + "/?"

    try:
        regex = re.compile(source, 0 if case_sensitive else re.IGNORECASE)
    except re.error as exc:
        raise PatternSyntaxError(pattern, f"invalid expression: {exc}") from exc

    return CompiledMatcher(pattern=pattern, tokens=tokens, names=names, regex=regex)
