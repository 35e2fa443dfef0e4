"""Positional argument middleware.

``ArgSet`` declares named positional arguments in order; the middleware
assigns the leading tokens to them and forwards the rest::

    def declare(args: ArgSet) -> None:
        args.add("name", "World", help="name to greet")
        args.add("count", 1, type=int, help="number of times to greet")

    r.use(ArgsMiddleware(declare))

Missing tokens leave the declared default in place.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from clir.context import Context
from clir.errors import ArgumentError
from clir.runner import Runner, RunnerFunc

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: str) -> bool:
    """Parse the boolean spellings accepted on the command line.

    Raises ``ValueError`` for anything else.
    """
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    msg = f"invalid boolean {value!r}"
    raise ValueError(msg)


def parse_int(value: str) -> int:
    """Parse an integer, honouring ``0x``, ``0o`` and ``0b`` prefixes."""
    return int(value, 0)


# type -> converter
CONVERTERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: parse_int,
    float: float,
    bool: parse_bool,
}


@dataclass(frozen=True, slots=True)
class Positional:
    """A declared positional argument."""

    name: str
    default: Any
    type: type = str
    help: str = ""

    def convert(self, token: str) -> Any:
        converter = CONVERTERS[self.type]
        try:
            return converter(token)
        except ValueError as exc:
            msg = f"invalid value {token!r} for argument {self.name}: {exc}"
            raise ArgumentError(msg) from exc


class ArgSet:
    """Ordered declaration of positional arguments. The order of calls is significant."""

    __slots__ = ("_formal",)

    def __init__(self) -> None:
        self._formal: list[Positional] = []

    def add(self, name: str, default: Any = None, *, type: type | None = None, help: str = "") -> None:  # noqa: A002
        """Declare the next positional argument.

        *type* defaults to the type of *default*, or ``str`` when the
        default is ``None``. Supported types are ``str``, ``int``,
        ``float`` and ``bool``.
        """
        arg_type = type or (str if default is None else default.__class__)
        if arg_type not in CONVERTERS:
            msg = f"Unsupported positional argument type {arg_type.__name__!r} for {name!r}"
            raise TypeError(msg)
        if any(p.name == name for p in self._formal):
            msg = f"Positional argument {name!r} is already declared"
            raise ValueError(msg)
        self._formal.append(Positional(name, default, arg_type, help))

    @property
    def positionals(self) -> tuple[Positional, ...]:
        return tuple(self._formal)

    def parse(self, args: tuple[str, ...]) -> tuple[dict[str, Any], tuple[str, ...]]:
        """Assign *args* to the declared arguments.

        Returns ``(values, rest)``: the value of every declared argument
        (default when no token was given) and the tokens beyond the
        declared count.
        """
        values: dict[str, Any] = {}
        for i, positional in enumerate(self._formal):
            if i < len(args):
                values[positional.name] = positional.convert(args[i])
            else:
                values[positional.name] = positional.default
        return values, args[len(self._formal) :]

    def usage(self) -> str:
        """One line per argument: name, type, default, and help."""
        lines = []
        for p in self._formal:
            line = f"  {p.name} ({p.type.__name__}, default {p.default!r})"
            if p.help:
                line = f"{line}  {p.help}"
            lines.append(line)
        return "\n".join(lines)


class ArgsMiddleware:
    """Assign leading tokens to the positional arguments declared by *configure*.

    Values are merged into ``ctx.values``. Conversion errors raise
    ``ArgumentError`` and the handler does not run.
    """

    __slots__ = ("argset",)

    def __init__(self, configure: Callable[[ArgSet], None]) -> None:
        self.argset = ArgSet()
        configure(self.argset)

    def __call__(self, next: Runner) -> Runner:
        def run(ctx: Context) -> None:
            values, rest = self.argset.parse(ctx.args)
            next.run(ctx.replace(args=rest, values={**ctx.values, **values}))

        return RunnerFunc(run)
