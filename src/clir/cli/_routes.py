"""``clir routes`` — list the commands of a router.

Resolves an import string to a router and prints one line per leaf
route: the command path, the patterns that lead to it, and the handler.
"""

import argparse
import sys

from clir.cli._resolve import resolve_router
from clir.errors import ConfigurationError


def _handler_name(runner: object) -> str:
    func = getattr(runner, "func", runner)
    return getattr(func, "__qualname__", type(runner).__name__)


def run_routes(args: argparse.Namespace) -> None:
    """Print a COMMAND / HANDLER table for ``args.router``."""
    try:
        router = resolve_router(args.router)
        routes = router.routes
    except (ImportError, ValueError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not routes:
        print("No routes registered.")
        return

    rows = [(str(route), _handler_name(route.runner)) for route in routes]
    width = max(max(len(command) for command, _ in rows), len("COMMAND"))

    fmt = f"{{:<{width}}}  {{}}"
    print(fmt.format("COMMAND", "HANDLER"))
    print("-" * min(width + 2 + max(len(h) for _, h in rows), 80))
    for command, handler in rows:
        print(fmt.format(command, handler))
