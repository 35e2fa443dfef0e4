"""Clir — routing and middleware for command-line command trees.

Pick a handler from the arguments, nested as deep as you like, and wrap
cross-cutting behaviour around each branch of the tree.

Basic usage::

    import clir

    router = clir.Router()

    @router.route("")
    def hello(ctx: clir.Context) -> None:
        ctx.println("Hello!")

    @router.branch("post")
    def post(r: clir.Router) -> None:
        r.use(clir.FlagsMiddleware(lambda p: p.add_argument("-v", action="store_true")))
        r.route("stdin", post_from_stdin)

    clir.run(router)
"""

__version__ = "0.1.0"
__all__ = [
    "ArgSet",
    "ArgsMiddleware",
    "ArgumentError",
    "Cancelled",
    "ClirError",
    "ConfigurationError",
    "Context",
    "FlagError",
    "FlagsMiddleware",
    "FrozenRouter",
    "LoggingMiddleware",
    "Middleware",
    "Pattern",
    "PingMiddleware",
    "RouteInfo",
    "RouteNotFound",
    "Router",
    "RunConfig",
    "Runner",
    "RunnerFunc",
    "compose",
    "execute",
    "run",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import clir`` fast while providing a clean top-level API.
    """
    if name == "Context":
        from clir.context import Context

        return Context

    if name in ("Runner", "RunnerFunc"):
        from clir import runner as _runner

        return getattr(_runner, name)

    if name in ("Router", "FrozenRouter", "RouteInfo", "Pattern"):
        from clir import routing as _routing

        return getattr(_routing, name)

    if name in (
        "ArgSet",
        "ArgsMiddleware",
        "FlagsMiddleware",
        "LoggingMiddleware",
        "Middleware",
        "PingMiddleware",
        "compose",
    ):
        from clir import middleware as _mw

        return getattr(_mw, name)

    if name in ("execute", "run"):
        from clir import entry as _entry

        return getattr(_entry, name)

    if name == "RunConfig":
        from clir.config import RunConfig

        return RunConfig

    if name in (
        "ArgumentError",
        "Cancelled",
        "ClirError",
        "ConfigurationError",
        "FlagError",
        "RouteNotFound",
    ):
        from clir import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
