"""Network pre-check middleware.

Confirms a URL is reachable before the wrapped command runs, so commands
that talk to a service fail fast with a clear transport error instead of
halfway through their work.
"""

import logging

import httpx

from clir.context import Context
from clir.runner import Runner, RunnerFunc

logger = logging.getLogger("clir.middleware")


class PingMiddleware:
    """GET *url* with *client*; only run the chain if it succeeds.

    Transport failures raise ``httpx.TransportError`` and error statuses
    raise ``httpx.HTTPStatusError``. Either way the handler never runs.

    When *verbose* names a context value (typically a flag parsed by an
    outer ``FlagsMiddleware``) and that value is truthy, ``Pinging!`` is
    printed first.

    Usage::

        client = httpx.Client(timeout=1.0)
        r.use(PingMiddleware(client, "https://example.com", verbose="v"))
    """

    __slots__ = ("client", "url", "verbose")

    def __init__(self, client: httpx.Client, url: str, *, verbose: str | None = None) -> None:
        self.client = client
        self.url = url
        self.verbose = verbose

    def __call__(self, next: Runner) -> Runner:
        def run(ctx: Context) -> None:
            ctx.check_cancelled()
            if self.verbose is not None and ctx.value(self.verbose):
                ctx.println("Pinging!")
            response = self.client.get(self.url)
            logger.debug("Ping %s -> %s", self.url, response.status_code)
            response.raise_for_status()
            next.run(ctx)

        return RunnerFunc(run)
