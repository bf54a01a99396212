"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Routing and dispatch configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(case_sensitive=False, handler_timeout=2.5)
    """

    # Matching
    case_sensitive: bool = True  # Literal path segments compare case-sensitively
    strict_slashes: bool = False  # False = accept one optional trailing "/"
    head_matches_get: bool = True  # HEAD requests satisfy GET-filtered routes

    # Dispatch
    handler_timeout: float | None = None  # Seconds per handler, dispatch_async only

    # Diagnostics
    debug: bool = False  # Log every route evaluation at DEBUG level
