"""Custom Middleware — function and class middleware examples.

Demonstrates:
- Function middleware (timing — reports elapsed time on stderr)
- Class middleware (confirmation — reads "y" from stdin before running)
- Short-circuiting: a middleware that returns without calling next

Run:
    cd examples/custom_middleware && echo y | python app.py wipe
"""

import time

import clir
from clir import Context, Router, Runner
from clir.middleware import middleware

# ---------------------------------------------------------------------------
# Function middleware: timing
# ---------------------------------------------------------------------------


@middleware
def timing(ctx: Context, next: Runner) -> None:
    """Report how long the rest of the chain took."""
    start = time.monotonic()
    try:
        next.run(ctx)
    finally:
        ctx.errorln(f"took {time.monotonic() - start:.3f}s")


# ---------------------------------------------------------------------------
# Class middleware: confirmation
# ---------------------------------------------------------------------------


class Confirm:
    """Ask before running. Anything but "y" stops the chain without an error."""

    def __init__(self, prompt: str) -> None:
        self.prompt = prompt

    def __call__(self, next: Runner) -> Runner:
        def run(ctx: Context) -> None:
            ctx.println(self.prompt, "[y/N]")
            if ctx.in_.readline().strip().lower() != "y":
                ctx.println("Aborted.")
                return
            next.run(ctx)

        return clir.RunnerFunc(run)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

router = Router()
router.use(timing)


@router.route("status")
def status(ctx: Context) -> None:
    ctx.println("All good.")


@router.scope
def destructive(r: Router) -> None:
    # Inherits timing, adds confirmation for these commands only.
    r.use(Confirm("Really?"))

    @r.route("wipe")
    def wipe(ctx: Context) -> None:
        ctx.println("Wiped.")


if __name__ == "__main__":
    clir.run(router)
