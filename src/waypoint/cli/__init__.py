"""Waypoint CLI — route table inspection.

Entry point registered as ``waypoint`` in ``pyproject.toml``::

    [project.scripts]
    waypoint = "waypoint.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypoint`` command."""
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint — ordered, multi-match request routing.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )

    # -- waypoint match ---------------------------------------------------
    match_parser = subparsers.add_parser(
        "match", help="Show which routes a request would reach"
    )
    match_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    match_parser.add_argument("method", help="HTTP method, e.g. GET")
    match_parser.add_argument("path", help="Request path, e.g. /posts/42")
    match_parser.add_argument(
        "--all",
        action="store_true",
        help="Also list routes whose path did not match",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from waypoint.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from waypoint.cli._match import run_match

        run_match(args)
