"""Test utilities for clir command trees.

Runs a router the same way ``clir.run`` does, but against in-memory
streams, and hands back what it wrote::

    from clir.testing import invoke

    result = invoke(router, "greet", "alice")
    assert result.ok
    assert result.out == "Hello, alice!\\n"
"""

import io
import threading
from dataclasses import dataclass

from clir.context import Context
from clir.runner import Runner, RunnerCallable, as_runner


@dataclass(frozen=True, slots=True)
class Invocation:
    """Outcome of one ``invoke`` call."""

    out: str
    err: str
    exception: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.exception is None


def invoke(
    runner: Runner | RunnerCallable,
    *args: str,
    stdin: str = "",
    cancel: threading.Event | None = None,
) -> Invocation:
    """Run *runner* with *args* and capture output and any exception.

    Exceptions from the runner are returned on the ``Invocation``
    rather than raised, so tests can assert on both output and failure.
    """
    out = io.StringIO()
    err = io.StringIO()
    ctx = Context(
        args=args,
        out=out,
        err=err,
        in_=io.StringIO(stdin),
        cancel=cancel or threading.Event(),
    )
    exception: Exception | None = None
    try:
        as_runner(runner).run(ctx)
    except Exception as exc:  # noqa: BLE001
        exception = exc
    return Invocation(out=out.getvalue(), err=err.getvalue(), exception=exception)
