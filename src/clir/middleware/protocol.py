"""Middleware protocol, chain composition, and the ``middleware`` decorator.

A middleware is any callable matching::

    def my_mw(next: Runner) -> Runner: ...

It receives the next runner in the chain and returns the runner that
wraps it. No base class required. The wrapping runner decides whether
to call ``next.run(ctx)``; returning without calling it stops the chain.

Most middleware only needs the context and ``next``. The ``middleware``
decorator builds the wrapping runner for you::

    @middleware
    def log_args(ctx: Context, next: Runner) -> None:
        logger.info("Called with %s", ctx.args)
        next.run(ctx)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import reduce
from typing import Protocol

from clir.context import Context
from clir.runner import Runner, RunnerCallable, RunnerFunc, as_runner


class Middleware(Protocol):
    """Protocol for clir middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def verbose(next: Runner) -> Runner:
            def run(ctx: Context) -> None:
                ctx.println("verbose")
                next.run(ctx)

            return RunnerFunc(run)

        # Class middleware
        class RequireArgs:
            def __call__(self, next: Runner) -> Runner: ...
    """

    def __call__(self, next: Runner) -> Runner | RunnerCallable: ...


def compose(middleware: Sequence[Middleware], terminal: Runner) -> Runner:
    """Wrap *terminal* in *middleware* so the first one declared runs first.

    The fold runs from the last middleware to the first: the last one
    wraps the terminal, and the first one ends up outermost.
    """
    return reduce(lambda inner, mw: as_runner(mw(inner)), reversed(middleware), terminal)


def middleware(func: Callable[[Context, Runner], None]) -> Middleware:
    """Turn ``func(ctx, next)`` into a middleware.

    The returned middleware wraps each ``next`` in a runner that calls
    *func* with the invocation context and that ``next``.
    """

    def wrap(next: Runner) -> Runner:
        return RunnerFunc(lambda ctx: func(ctx, next))

    wrap.__name__ = getattr(func, "__name__", "middleware")
    wrap.__qualname__ = getattr(func, "__qualname__", wrap.__name__)
    wrap.__doc__ = func.__doc__
    return wrap
