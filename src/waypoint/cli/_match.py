"""``waypoint match`` — show how a request would be dispatched.

Evaluates every route against the given method and path without
invoking any handler, and prints the per-route result. The summary
follows ``Router.dispatch``: a request reached only by uncounted routes
is a not-found or a method mismatch. Handlers may stop a real pass
early; this dry run cannot know that.
"""

import argparse
import sys

from waypoint.cli._resolve import resolve_table
from waypoint.cli._routes import handler_label
from waypoint.routing.route import MatchStatus


def run_match(args: argparse.Namespace) -> None:
    """Print the three-valued evaluation of each route, then a summary."""
    try:
        table = resolve_table(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    method = args.method.upper()
    head_matches_get = table.config.head_matches_get
    invoked = 0
    counted = 0
    allowed: set[str] = set()

    for position, route in enumerate(table.all(), start=1):
        result = route.evaluate(method, args.path, head_matches_get=head_matches_get)
        if result.status is MatchStatus.PATH_MISS and not args.all:
            continue
        line = f"{position:>3}  {result.status.value:<11}  {route.pattern or '*'}  {handler_label(route)}"
        if result.params:
            captures = ", ".join(f"{key}={value!r}" for key, value in result.params.items())
            line += f"  {{{captures}}}"
        print(line)
        if result.status is MatchStatus.MATCH:
            invoked += 1
            counted += route.count_match
        elif result.status is MatchStatus.METHOD_MISS and route.methods:
            allowed.update(route.methods)
            if head_matches_get and "GET" in route.methods:
                allowed.add("HEAD")

    if counted:
        print(f"\n{method} {args.path}: {invoked} handler(s) would run")
    elif allowed:
        print(f"\n{method} {args.path}: method not allowed (Allow: {', '.join(sorted(allowed))})")
    else:
        print(f"\n{method} {args.path}: not found")
