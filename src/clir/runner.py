"""Runner protocol and function adapter.

A runner is anything with a ``run(ctx)`` method::

    class Greet:
        def run(self, ctx: Context) -> None:
            ctx.println("Hello!")

Success is a normal return. Failure is a raised exception. Leaf handlers,
composed middleware chains, and routers all satisfy the same protocol,
so a router can be registered wherever a handler can.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeAlias, runtime_checkable

from clir.context import Context

# Plain function form of a runner
RunnerCallable: TypeAlias = Callable[[Context], None]


@runtime_checkable
class Runner(Protocol):
    """Protocol for anything that can run with a ``Context``."""

    def run(self, ctx: Context) -> None: ...


class RunnerFunc:
    """Adapt a plain function ``f(ctx)`` to the ``Runner`` protocol.

    Usage::

        router.route("get", RunnerFunc(get))
    """

    __slots__ = ("func",)

    def __init__(self, func: RunnerCallable) -> None:
        self.func = func

    def run(self, ctx: Context) -> None:
        self.func(ctx)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"RunnerFunc({name})"


def as_runner(obj: Runner | RunnerCallable) -> Runner:
    """Return *obj* as a ``Runner``, wrapping plain callables.

    Raises ``TypeError`` for anything that is neither.
    """
    if isinstance(obj, Runner):
        return obj
    if callable(obj):
        return RunnerFunc(obj)
    msg = f"{type(obj).__name__!r} is not a runner: expected a run(ctx) method or a callable"
    raise TypeError(msg)
