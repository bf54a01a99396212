"""Tests for waypoint.errors — exception hierarchy and error messages."""

import pytest

from waypoint.errors import (
    ConfigurationError,
    DispatchSignal,
    DuplicateNameError,
    DuplicateServiceError,
    FrozenError,
    MissingParameterError,
    PatternSyntaxError,
    RouteNotFoundError,
    SkipRoute,
    StopDispatch,
    UnknownServiceError,
    WaypointError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_type",
        [PatternSyntaxError, DuplicateNameError, FrozenError, DuplicateServiceError],
    )
    def test_configuration_errors(self, error_type: type) -> None:
        assert issubclass(error_type, ConfigurationError)
        assert issubclass(error_type, WaypointError)

    def test_lookup_errors(self) -> None:
        assert issubclass(RouteNotFoundError, LookupError)
        assert issubclass(UnknownServiceError, LookupError)
        assert issubclass(MissingParameterError, KeyError)

    def test_signals(self) -> None:
        assert issubclass(StopDispatch, DispatchSignal)
        assert issubclass(SkipRoute, DispatchSignal)
        assert not issubclass(DispatchSignal, ConfigurationError)


class TestMessages:
    def test_pattern_syntax_error(self) -> None:
        err = PatternSyntaxError("/a]", "unmatched ']'", 2)
        assert str(err) == "Invalid route pattern '/a]' at position 2: unmatched ']'"
        assert err.reason == "unmatched ']'"

    def test_pattern_syntax_error_without_position(self) -> None:
        err = PatternSyntaxError("/a", "bad")
        assert str(err) == "Invalid route pattern '/a': bad"

    def test_duplicate_name(self) -> None:
        assert "'post'" in str(DuplicateNameError("post"))

    def test_route_not_found(self) -> None:
        err = RouteNotFoundError("post")
        assert err.name == "post"
        assert str(err) == "No route named 'post'."

    def test_missing_parameter(self) -> None:
        err = MissingParameterError("post", "id")
        assert str(err) == "Route 'post' requires parameter 'id'."

    def test_services(self) -> None:
        assert "'db'" in str(DuplicateServiceError("db"))
        assert str(UnknownServiceError("db")) == "Unknown service 'db'."
