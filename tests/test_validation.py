"""Tests for waypoint.validation — built-in checks and the validator registry."""

import pytest

from waypoint.errors import ConfigurationError
from waypoint.validation import ValidationResult, ValidatorRegistry
from waypoint.validation.rules import (
    alnum,
    alpha,
    chars,
    contains,
    email,
    integer,
    ip,
    length,
    matches,
    null,
    number,
    url,
)

# ---------------------------------------------------------------------------
# Individual check tests
# ---------------------------------------------------------------------------


class TestNull:
    def test_empty(self) -> None:
        assert null("") is None
        assert null(None) is None

    def test_non_empty(self) -> None:
        assert null("x") == "Must be empty"


class TestLength:
    def test_exact(self) -> None:
        assert length("abc", 3) is None
        assert length("abcd", 3) is not None

    def test_range(self) -> None:
        assert length("abc", 1, 5) is None
        assert length("", 1, 5) is not None
        assert length("abcdef", 1, 5) is not None


class TestNumbers:
    def test_integer(self) -> None:
        assert integer("42") is None
        assert integer("-7") is None
        assert integer("4.2") is not None
        assert integer("") is not None

    def test_number(self) -> None:
        assert number("4.2") is None
        assert number("1e3") is None
        assert number("abc") is not None


class TestFormats:
    def test_email(self) -> None:
        assert email("user@example.com") is None
        assert email("not-an-email") is not None

    def test_url(self) -> None:
        assert url("https://example.com/path") is None
        assert url("example.com") is not None

    def test_ip(self) -> None:
        assert ip("127.0.0.1") is None
        assert ip("::1") is None
        assert ip("999.1.1.1") is not None


class TestCharacterClasses:
    def test_alnum(self) -> None:
        assert alnum("abc123") is None
        assert alnum("abc-123") is not None

    def test_alpha(self) -> None:
        assert alpha("abc") is None
        assert alpha("abc1") is not None

    def test_chars(self) -> None:
        assert chars("a1b2", "a-z0-9") is None
        assert chars("A1", "a-z0-9") is None
        assert chars("a_b", "a-z") is not None


class TestContent:
    def test_contains(self) -> None:
        assert contains("index.php", ".php") is None
        assert contains("index.html", ".php") == "Must contain '.php'"

    def test_matches(self) -> None:
        assert matches("v2", r"v[0-9]") is None
        assert matches("x2", r"v[0-9]") is not None


# ---------------------------------------------------------------------------
# Registry tests
# ---------------------------------------------------------------------------


class TestValidatorRegistry:
    def test_defaults_registered(self) -> None:
        registry = ValidatorRegistry()
        for name in ("null", "len", "int", "float", "email", "url", "ip", "alnum", "alpha"):
            assert name in registry

    def test_no_defaults(self) -> None:
        registry = ValidatorRegistry(defaults=False)
        assert list(registry) == []

    def test_validate_collects_all_errors(self) -> None:
        result = ValidatorRegistry().validate("ab-", "alnum", ("len", 5, 10))
        assert isinstance(result, ValidationResult)
        assert not result
        assert len(result.errors) == 2
        assert result.value == "ab-"

    def test_validate_passes(self) -> None:
        result = ValidatorRegistry().validate("hello42", "alnum", ("len", 1, 10))
        assert result
        assert result.is_valid
        assert result.errors == ()

    def test_none_checked_as_empty(self) -> None:
        registry = ValidatorRegistry()
        assert registry.validate(None, "null")
        assert not registry.validate(None, "alpha")

    def test_negation(self) -> None:
        registry = ValidatorRegistry()
        assert registry.validate("index.html", ("not_contains", ".php"))
        result = registry.validate("index.php", ("not_contains", ".php"))
        assert result.errors == ("Must not satisfy 'contains'",)

    def test_custom_check(self) -> None:
        registry = ValidatorRegistry()
        registry.register("even", lambda v: None if int(v) % 2 == 0 else "Must be even")
        assert registry.validate("4", "int", "even")
        assert registry.validate("3", "even").errors == ("Must be even",)
        assert registry.validate("3", "not_even")

    def test_custom_check_with_args(self) -> None:
        registry = ValidatorRegistry()
        registry.register(
            "prefix", lambda v, p: None if v.startswith(p) else f"Must start with {p}"
        )
        assert registry.validate("api_key", ("prefix", "api_"))
        assert not registry.validate("key", ("prefix", "api_"))

    def test_replace_check(self) -> None:
        registry = ValidatorRegistry()
        registry.register("int", lambda v: None)
        assert registry.validate("abc", "int")

    def test_unknown_check(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown validator 'nope'"):
            ValidatorRegistry().validate("x", "nope")

    def test_unknown_negated_check(self) -> None:
        with pytest.raises(ConfigurationError):
            ValidatorRegistry().get("not_nope")

    @pytest.mark.parametrize("name", ["", "not_even"])
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(ConfigurationError):
            ValidatorRegistry().register(name, lambda v: None)
