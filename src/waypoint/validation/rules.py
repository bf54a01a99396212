"""Built-in string checks.

Each check is a callable with the signature::

    def rule(value: str, *args) -> str | None:
        '''Return error message, or None if valid.'''

Extra arguments come from the check spec, e.g. ``("len", 3, 40)``
calls ``length(value, 3, 40)``. Custom checks follow the same protocol
and are added with ``ValidatorRegistry.register``.
"""

import ipaddress
import re
from collections.abc import Callable
from typing import Any

# Type alias for a check function
type Check = Callable[..., str | None]


# ---------------------------------------------------------------------------
# Presence and length
# ---------------------------------------------------------------------------


def null(value: str | None) -> str | None:
    """Value must be absent or empty."""
    if value:
        return "Must be empty"
    return None


def length(value: str, min_len: int, max_len: int | None = None) -> str | None:
    """String length must be exactly *min_len*, or within [min_len, max_len]."""
    size = len(value)
    if max_len is None:
        if size != min_len:
            return f"Must be exactly {min_len} characters"
    elif not min_len <= size <= max_len:
        return f"Must be between {min_len} and {max_len} characters"
    return None


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def integer(value: str) -> str | None:
    """Value must be a whole number, optionally signed."""
    if not re.fullmatch(r"[-+]?[0-9]+", value):
        return "Must be a whole number"
    return None


def number(value: str) -> str | None:
    """Value must be a valid number (int or float)."""
    try:
        float(value)
    except (ValueError, TypeError):
        return "Must be a number"
    return None


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Structure only, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")

# Scheme and host structure only
_URL_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://[^\s/$.?#].\S*$", re.IGNORECASE)


def email(value: str) -> str | None:
    """Value must be a valid email address (basic format check)."""
    if not _EMAIL_RE.match(value):
        return "Must be a valid email address"
    return None


def url(value: str) -> str | None:
    """Value must be an absolute URL."""
    if not _URL_RE.match(value):
        return "Must be a valid URL"
    return None


def ip(value: str) -> str | None:
    """Value must be an IPv4 or IPv6 address."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return "Must be a valid IP address"
    return None


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------


def alnum(value: str) -> str | None:
    """Value must be ASCII letters and digits only."""
    if not re.fullmatch(r"[0-9A-Za-z]+", value):
        return "Must contain only letters and digits"
    return None


def alpha(value: str) -> str | None:
    """Value must be ASCII letters only."""
    if not re.fullmatch(r"[A-Za-z]+", value):
        return "Must contain only letters"
    return None


def chars(value: str, allowed: str) -> str | None:
    """Every character must fall in the regex character class *allowed*, e.g. ``"a-z0-9"``."""
    if not re.fullmatch(f"[{allowed}]+", value, re.IGNORECASE):
        return f"Must contain only the characters {allowed}"
    return None


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


def contains(value: str, needle: str) -> str | None:
    if needle not in value:
        return f"Must contain {needle!r}"
    return None


def matches(value: str, pattern: str) -> str | None:
    """Value must match the given regex pattern (anchored at the start)."""
    if not re.match(pattern, value):
        return f"Must match pattern: {pattern}"
    return None


DEFAULT_CHECKS: dict[str, Check] = {
    "null": null,
    "len": length,
    "int": integer,
    "float": number,
    "email": email,
    "url": url,
    "ip": ip,
    "alnum": alnum,
    "alpha": alpha,
    "contains": contains,
    "regex": matches,
    "chars": chars,
}


def negate(name: str, check: Check) -> Check:
    """Invert *check*: passes exactly when *check* fails."""

    def inverted(value: Any, *args: Any) -> str | None:
        if check(value, *args) is None:
            return f"Must not satisfy {name!r}"
        return None

    return inverted
