"""Router import resolution — resolves ``"module:attribute"`` strings to route tables.

Shared utility used by ``waypoint routes`` and ``waypoint match``.
"""

import importlib

from waypoint.router import Router
from waypoint.routing.table import RouteTable


def resolve_table(import_string: str) -> RouteTable:
    """Resolve an import string to a ``RouteTable``.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"router"``. The attribute may be a ``Router``,
    a ``RouteTable``, or a zero-argument factory returning either.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a router or route table.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    # Support factory functions - call them if they're not already a router
    if callable(obj) and not isinstance(obj, Router | RouteTable):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, Router):
        return obj.table
    if isinstance(obj, RouteTable):
        return obj

    msg = f"{import_string!r} resolved to {type(obj).__name__}, not a Router or RouteTable"
    raise TypeError(msg)
