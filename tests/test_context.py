"""Tests for waypoint.dispatch.context — DispatchContext and signals."""

from waypoint.dispatch.context import CONTINUE, STOP, DispatchContext, Signal
from waypoint.validation import ValidatorRegistry


class TestSignals:
    def test_aliases(self) -> None:
        assert CONTINUE is Signal.CONTINUE
        assert STOP is Signal.STOP
        assert CONTINUE is not STOP


class TestDispatchContext:
    def test_defaults(self) -> None:
        ctx = DispatchContext(method="GET", path="/")
        assert ctx.params == {}
        assert ctx.matched_count == 0
        assert ctx.stopped is False
        assert ctx.error is None
        assert ctx.output == []
        assert ctx.shared == {}

    def test_stop(self) -> None:
        ctx = DispatchContext(method="GET", path="/")
        ctx.stop()
        assert ctx.stopped is True

    def test_independent_defaults(self) -> None:
        a = DispatchContext(method="GET", path="/")
        b = DispatchContext(method="GET", path="/")
        a.params["x"] = "1"
        assert b.params == {}


class TestValidateParam:
    def test_valid(self) -> None:
        ctx = DispatchContext(method="GET", path="/", params={"id": "42"})
        result = ctx.validate_param("id", "int", ("len", 1, 3))
        assert result
        assert result.value == "42"

    def test_invalid(self) -> None:
        ctx = DispatchContext(method="GET", path="/", params={"id": "abc"})
        result = ctx.validate_param("id", "int")
        assert not result
        assert result.errors == ("Must be a whole number",)

    def test_missing_param_checked_as_empty(self) -> None:
        ctx = DispatchContext(method="GET", path="/")
        assert ctx.validate_param("page", "null")
        assert not ctx.validate_param("page", "int")

    def test_uses_supplied_registry(self) -> None:
        registry = ValidatorRegistry()
        registry.register("even", lambda v: None if int(v) % 2 == 0 else "Must be even")
        ctx = DispatchContext(method="GET", path="/", params={"n": "3"}, validators=registry)
        assert ctx.validate_param("n", "even").errors == ("Must be even",)

    def test_positional_param(self) -> None:
        ctx = DispatchContext(method="GET", path="/", params={0: "index.php"})
        assert ctx.validate_param(0, ("contains", ".php"))
