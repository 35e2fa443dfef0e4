"""Call logging middleware."""

import logging

from clir.context import Context
from clir.runner import Runner, RunnerFunc


class LoggingMiddleware:
    """Log every call, with its remaining arguments, before running the chain.

    Usage::

        router.use(LoggingMiddleware(logging.getLogger("myapp")))
    """

    __slots__ = ("level", "logger")

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger("clir.calls")
        self.level = level

    def __call__(self, next: Runner) -> Runner:
        def run(ctx: Context) -> None:
            self.logger.log(self.level, "Called args=%r", list(ctx.args))
            next.run(ctx)

        return RunnerFunc(run)
