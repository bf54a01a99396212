"""Waypoint — ordered, multi-match request routing and dispatch.

Compiles declarative path patterns, keeps routes in registration order,
and invokes every matching handler for a request until one stops the pass.

Basic usage::

    from waypoint import STOP, Router

    router = Router()

    @router.route()
    def setup(params, ctx):
        ctx.shared["started"] = True

    @router.route("/hello/[:name]", methods="GET", name="hello")
    def hello(params, ctx):
        return f"Hello, {params['name']}!"

    outcome = router.dispatch("GET", "/hello/alice")
    outcome.value                                # "Hello, alice!"
    router.path_for("hello", {"name": "bob"})    # "/hello/bob"
"""

__version__ = "0.1.0"
__all__ = [
    "CONTINUE",
    "STOP",
    "ConfigurationError",
    "DispatchContext",
    "Dispatcher",
    "DuplicateNameError",
    "Failed",
    "Handled",
    "MethodNotAllowed",
    "MissingParameterError",
    "NotFound",
    "PatternSyntaxError",
    "Route",
    "RouteNotFoundError",
    "RouteTable",
    "Router",
    "RouterConfig",
    "ServiceRegistry",
    "SkipRoute",
    "StopDispatch",
    "ValidatorRegistry",
    "WaypointError",
    "compile_pattern",
]

_ERRORS = (
    "ConfigurationError",
    "DuplicateNameError",
    "MissingParameterError",
    "PatternSyntaxError",
    "RouteNotFoundError",
    "SkipRoute",
    "StopDispatch",
    "WaypointError",
)

_DISPATCH = (
    "CONTINUE",
    "STOP",
    "DispatchContext",
    "Dispatcher",
    "Failed",
    "Handled",
    "MethodNotAllowed",
    "NotFound",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from waypoint.router import Router

        return Router

    if name == "RouterConfig":
        from waypoint.config import RouterConfig

        return RouterConfig

    if name == "Route":
        from waypoint.routing.route import Route

        return Route

    if name == "RouteTable":
        from waypoint.routing.table import RouteTable

        return RouteTable

    if name == "compile_pattern":
        from waypoint.routing.patterns import compile_pattern

        return compile_pattern

    if name in _DISPATCH:
        from waypoint import dispatch as _dispatch

        return getattr(_dispatch, name)

    if name == "ServiceRegistry":
        from waypoint.services import ServiceRegistry

        return ServiceRegistry

    if name == "ValidatorRegistry":
        from waypoint.validation import ValidatorRegistry

        return ValidatorRegistry

    if name in _ERRORS:
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
