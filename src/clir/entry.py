"""Process entry point — bind argv, standard streams, and signals to a run.

``run(router)`` is what a program's ``main`` calls::

    def main() -> None:
        clir.run(build_router())

It builds a ``Context`` from the process, dispatches, and on failure
prints ``Error: <message>`` to stderr and exits with status 1.
``execute`` does the same but returns the exit code instead of exiting.
"""

import logging
import signal
import sys
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, TextIO

from clir.config import RunConfig
from clir.context import Context
from clir.runner import Runner, RunnerCallable, as_runner

logger = logging.getLogger("clir.run")


@contextmanager
def cancel_on_signals(cancel: threading.Event, signals: Sequence[int]) -> Iterator[None]:
    """Set *cancel* when any of *signals* arrives, for the duration of the block.

    Previous handlers are restored on exit. Outside the main thread,
    Python does not allow installing signal handlers, so nothing is
    installed and *cancel* is only set by the caller.
    """
    if threading.current_thread() is not threading.main_thread():
        logger.debug("Not in the main thread, signal cancellation disabled")
        yield
        return

    def handle(signum: int, _frame: Any) -> None:
        logger.debug("Received signal %d, cancelling", signum)
        cancel.set()

    previous: dict[int, Any] = {}
    try:
        for signum in signals:
            previous[signum] = signal.signal(signum, handle)
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def _configure_logging(config: RunConfig, stream: TextIO) -> None:
    if config.log_level is None:
        return
    logging.basicConfig(
        level=config.log_level.upper(),
        format=config.log_format,
        stream=stream,
    )


def execute(
    runner: Runner | RunnerCallable,
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    config: RunConfig | None = None,
) -> int:
    """Run *runner* with a context built from the process and return an exit code.

    Args:
        runner: The root router or any other runner.
        argv: Arguments without the program name. Defaults to ``sys.argv[1:]``.
        stdin: Input stream. Defaults to ``sys.stdin``.
        stdout: Output stream. Defaults to ``sys.stdout``.
        stderr: Error stream. Defaults to ``sys.stderr``.
        config: Failure reporting, signals, and logging. Defaults to ``RunConfig()``.

    Returns:
        ``0`` on success, ``config.exit_code`` if the runner raised.
    """
    cfg = config or RunConfig()
    err = sys.stderr if stderr is None else stderr
    _configure_logging(cfg, err)

    ctx = Context(
        args=tuple(sys.argv[1:] if argv is None else argv),
        out=sys.stdout if stdout is None else stdout,
        err=err,
        in_=sys.stdin if stdin is None else stdin,
        cancel=threading.Event(),
    )
    root = as_runner(runner)

    with cancel_on_signals(ctx.cancel, cfg.signals):
        try:
            root.run(ctx)
        except Exception as exc:
            logger.debug("Command failed", exc_info=exc)
            ctx.errorln(cfg.error_prefix, exc)
            return cfg.exit_code
    return 0


def run(
    runner: Runner | RunnerCallable,
    argv: Sequence[str] | None = None,
    *,
    config: RunConfig | None = None,
) -> None:
    """Run *runner* against the process and exit non-zero on failure.

    Returns normally on success. Raises ``SystemExit`` with
    ``config.exit_code`` when the runner raised.
    """
    code = execute(runner, argv, config=config)
    if code:
        raise SystemExit(code)
