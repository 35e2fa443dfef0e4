"""Clir CLI — inspect command trees.

Entry point registered as ``clir`` in ``pyproject.toml``::

    [project.scripts]
    clir = "clir.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``clir`` command."""
    parser = argparse.ArgumentParser(
        prog="clir",
        description="clir — routing and middleware for command-line command trees.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- clir routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the commands of a router")
    routes_parser.add_argument(
        "router",
        help="module:path of a router or a function that builds one (default path: router)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from clir.cli._routes import run_routes

        run_routes(args)
