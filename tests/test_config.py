"""Tests for waypoint.config — RouterConfig frozen dataclass."""

import pytest

from waypoint.config import RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.case_sensitive is True
        assert cfg.strict_slashes is False
        assert cfg.head_matches_get is True
        assert cfg.handler_timeout is None
        assert cfg.debug is False

    def test_override(self) -> None:
        cfg = RouterConfig(case_sensitive=False, handler_timeout=2.5, debug=True)

        assert cfg.case_sensitive is False
        assert cfg.handler_timeout == 2.5
        assert cfg.debug is True

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]
