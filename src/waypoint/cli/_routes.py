"""``waypoint routes`` — list registered routes.

Resolves an import string to a route table and prints every route in
registration order, which is also dispatch order.
"""

import argparse
import sys

from waypoint.cli._resolve import resolve_table
from waypoint.routing.route import Route


def handler_label(route: Route) -> str:
    name = getattr(route.handler, "__name__", str(route.handler))
    if route.name:
        name = f"{name} ({route.name})"
    if not route.count_match:
        name += " [uncounted]"
    return name


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes as a table of METHOD, PATTERN, and HANDLER."""
    try:
        table = resolve_table(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = table.all()
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(sorted(route.methods)) if route.methods else "*"
        rows.append((methods_str, route.pattern or "*", handler_label(route)))

    # Column widths
    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    sep_len = max_methods + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, pattern, label in rows:
        print(fmt.format(methods_str, pattern, label))
