"""Example command tree — root, a named route, positional args, and a branch.

Demonstrates:
- Logging middleware for every command
- Flags middleware on the root, parsed after the matched command (``-v``)
- A route with positional arguments (``greet NAME COUNT``)
- A branch guarded by a network pre-check (``post -v stdin``, ``post random``)

Run:
    cd examples/app && python app.py greet alice 2
"""

import logging
import random

import httpx

import clir
from clir import Context, Router
from clir.middleware import ArgSet, ArgsMiddleware, FlagsMiddleware, LoggingMiddleware, PingMiddleware

URL = "https://example.com"


def build_router(client: httpx.Client, logger: logging.Logger | None = None) -> Router:
    """Build the example tree around *client*."""
    r = Router()

    # Add logging middleware to all routes.
    r.use(LoggingMiddleware(logger or logging.getLogger("example")))
    r.use(FlagsMiddleware(lambda p: p.add_argument("-v", action="store_true", help="verbose")))

    r.route("", print_hello)
    r.route("get", get(client))

    # Positional arguments belong to this one route.
    r.route("greet", greet, middleware=[ArgsMiddleware(declare_greeting)])

    @r.branch("post")
    def _(r: Router) -> None:
        r.use(PingMiddleware(client, URL, verbose="v"))

        r.route("stdin", post_from_stdin(client))
        r.route("random", post_from_random(client))

    return r


def declare_greeting(args: ArgSet) -> None:
    args.add("name", "World", help="name to greet")
    args.add("count", 1, help="number of times to greet")


def greet(ctx: Context) -> None:
    for _ in range(ctx.value("count")):
        ctx.println(f"Hello, {ctx.value('name')}!")


def print_hello(ctx: Context) -> None:
    """Print hello to stdout."""
    ctx.println("Hello!")


def get(client: httpx.Client):
    """GET example.com."""

    def run(ctx: Context) -> None:
        try:
            res = client.get(URL)
        except httpx.HTTPError:
            ctx.errorln("Didn't get it.")
            raise
        ctx.println("Got it! Response:", res.status_code)

    return run


def post_from_stdin(client: httpx.Client):
    """POST stdin to example.com."""

    def run(ctx: Context) -> None:
        try:
            res = client.post(URL, content=ctx.in_.read(), headers={"content-type": "text/plain"})
        except httpx.HTTPError:
            ctx.errorln("Didn't post stdin.")
            raise
        ctx.println("Posted stdin! Response:", res.status_code)

    return run


def post_from_random(client: httpx.Client):
    """POST a random number to example.com."""

    def run(ctx: Context) -> None:
        number = random.randint(0, 2**31)
        ctx.println("Random number is", number)
        try:
            res = client.post(URL, content=str(number), headers={"content-type": "text/plain"})
        except httpx.HTTPError:
            ctx.errorln("Didn't post the random number.")
            raise
        ctx.println("Posted the random number! Response:", res.status_code)

    return run


router = build_router(httpx.Client(timeout=1.0))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    clir.run(router)
