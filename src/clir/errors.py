"""Clir exception hierarchy.

Shared across Router, middleware, and the entry point so every module
raises and catches the same types.
"""

from collections.abc import Sequence


class ClirError(Exception):
    """Base for all clir-specific errors."""


class ConfigurationError(ClirError):
    """Raised when a command tree is built incorrectly.

    Duplicate patterns, middleware added after routes, and changes to a
    frozen router all raise this at the offending call. It signals a
    programming mistake, so nothing in clir catches it.
    """


class RouteNotFound(ClirError):  # noqa: N818
    """No pattern and no scoped router could handle the arguments.

    A parent router treats this as "try the next scope"; every other
    exception ends dispatch.
    """

    def __init__(self, args: Sequence[str] = (), detail: str = "route not found") -> None:
        super().__init__(detail)
        self.remaining: tuple[str, ...] = tuple(args)
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


class Cancelled(ClirError):  # noqa: N818
    """The invocation was cancelled (SIGINT/SIGTERM or a set cancel event)."""

    def __init__(self, detail: str = "cancelled") -> None:
        super().__init__(detail)


class FlagError(ClirError):
    """Flag parsing failed in ``FlagsMiddleware``."""


class ArgumentError(ClirError):
    """A positional argument could not be converted in ``ArgsMiddleware``."""
