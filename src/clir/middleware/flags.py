"""Flag parsing middleware built on argparse.

Parses the options at the front of the remaining arguments, stores
their values on the context, and forwards whatever follows the first
positional token::

    def declare(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-v", action="store_true", help="verbose")

    router.use(FlagsMiddleware(declare))

    # handlers read the result from the context
    if ctx.value("v"):
        ...

``--`` ends the flags and is dropped. ``-h``/``--help`` prints usage to
the error stream and ends the chain without running the handler.
"""

import argparse
import logging
from collections.abc import Callable
from typing import Any, NoReturn, TextIO

from clir.context import Context
from clir.errors import FlagError
from clir.runner import Runner, RunnerFunc

logger = logging.getLogger("clir.middleware")

# Destination for the unparsed tail. Not a valid option name, so it
# cannot collide with a declared flag.
_REST = "clir rest"


class _HelpShown(Exception):  # noqa: N818
    """Raised by the parser when it would exit after printing help."""


class _FlagParser(argparse.ArgumentParser):
    """ArgumentParser that writes to a context stream and never exits."""

    def __init__(self, stream: TextIO, **kwargs: Any) -> None:
        super().__init__(exit_on_error=False, allow_abbrev=False, **kwargs)
        self._stream = stream

    def _print_message(self, message: str, file: Any = None) -> None:
        if message:
            self._stream.write(message)

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        if message:
            self._print_message(message)
        if status == 0:
            raise _HelpShown()
        raise FlagError(message or f"exit status {status}")

    def error(self, message: str) -> NoReturn:
        raise FlagError(message)


class FlagsMiddleware:
    """Parse leading flags with a fresh ``argparse.ArgumentParser`` per call.

    *configure* receives the parser and declares options on it. A parser
    is built for every invocation, so one instance is safe to share
    between routers and threads.

    Values are merged into ``ctx.values`` under each option's ``dest``.
    Usage lines name *prog*, which is empty unless given; the program name
    in ``sys.argv`` is never used. Parse errors raise ``FlagError``.
    """

    __slots__ = ("configure", "description", "prog")

    def __init__(
        self,
        configure: Callable[[argparse.ArgumentParser], None],
        *,
        prog: str = "",
        description: str | None = None,
    ) -> None:
        self.configure = configure
        self.prog = prog
        self.description = description

    def parser(self, stream: TextIO) -> argparse.ArgumentParser:
        """Build the parser for one invocation, writing usage to *stream*."""
        parser = _FlagParser(stream, prog=self.prog, description=self.description)
        self.configure(parser)
        parser.add_argument(_REST, nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
        return parser

    def parse(self, args: tuple[str, ...], stream: TextIO) -> tuple[dict[str, Any], list[str]] | None:
        """Parse *args*. Returns ``(values, rest)``, or ``None`` if help was shown."""
        parser = self.parser(stream)
        try:
            namespace = parser.parse_args(list(args))
        except _HelpShown:
            return None
        except argparse.ArgumentError as exc:
            raise FlagError(str(exc)) from exc

        values = vars(namespace)
        rest = values.pop(_REST)
        # "--" ends the flags and is not an argument itself
        if rest[:1] == ["--"]:
            rest = rest[1:]
        return values, rest

    def __call__(self, next: Runner) -> Runner:
        def run(ctx: Context) -> None:
            parsed = self.parse(ctx.args, ctx.err)
            if parsed is None:
                logger.debug("Help shown, skipping %r", next)
                return
            values, rest = parsed
            next.run(ctx.replace(args=rest, values={**ctx.values, **values}))

        return RunnerFunc(run)
