"""Command router — pattern registration, middleware, branches, and scopes.

Routes are registered during setup on a mutable ``Router`` and compiled
into an immutable ``FrozenRouter`` on the first run (or an explicit
``freeze()``). Every middleware chain is composed once at freeze time.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from clir.context import Context
from clir.errors import ConfigurationError, RouteNotFound
from clir.middleware.protocol import Middleware, compose
from clir.routing.pattern import Pattern
from clir.runner import Runner, RunnerCallable, as_runner

logger = logging.getLogger("clir.routing")

PatternLike: TypeAlias = "str | re.Pattern[str] | Pattern"
Build: TypeAlias = "Callable[[Router], None]"


@dataclass(frozen=True, slots=True)
class RouteInfo:
    """A leaf route as seen from the root of a tree.

    ``path`` holds the pattern source of every level leading to the
    route, root patterns (``""``) included.
    """

    path: tuple[str, ...]
    pattern: Pattern
    runner: Runner

    @property
    def command(self) -> str:
        """Space-joined path without root segments, ``""`` for the top-level root."""
        return " ".join(part for part in self.path if part)

    def __str__(self) -> str:
        return self.command or "<root>"


class FrozenRouter:
    """Compiled, dispatch-only router.

    Holds tuples of ``(pattern, runner, chain)`` where ``chain`` is the
    runner already wrapped in this router's middleware, plus the frozen
    scoped routers tried when no pattern matches.

    Usage::

        frozen = router.freeze()
        frozen.run(Context(args=("get",)))
    """

    __slots__ = ("_routes", "_scopes")

    def __init__(
        self,
        routes: tuple[tuple[Pattern, Runner, Runner], ...],
        scopes: tuple[FrozenRouter, ...],
    ) -> None:
        self._routes = routes
        self._scopes = scopes

    def run(self, ctx: Context) -> None:
        """Dispatch *ctx* to the first matching route.

        Raises ``RouteNotFound`` if no pattern and no scoped router
        handles the arguments. Any other exception comes from a handler
        or middleware and is propagated unchanged.
        """
        token = ctx.token
        for pattern, _runner, chain in self._routes:
            captures = pattern.match(token)
            if captures is None:
                continue
            rest = ctx.args if token is None else ctx.args[1:]
            chain.run(ctx.replace(args=rest, matches=captures))
            return

        for scope in self._scopes:
            try:
                scope.run(ctx)
            except RouteNotFound:
                continue
            return

        logger.debug("No route matches %r", ctx.args)
        raise RouteNotFound(ctx.args)

    @property
    def routes(self) -> list[RouteInfo]:
        """Return every leaf route in match order.

        Branches are expanded in place; scoped routers follow the
        routes registered directly on this router.
        """
        result: list[RouteInfo] = []
        self._collect_routes((), result)
        return result

    def _collect_routes(self, prefix: tuple[str, ...], result: list[RouteInfo]) -> None:
        for pattern, runner, _chain in self._routes:
            path = (*prefix, pattern.source)
            if isinstance(runner, FrozenRouter):
                runner._collect_routes(path, result)
            else:
                result.append(RouteInfo(path=path, pattern=pattern, runner=runner))

        for scope in self._scopes:
            scope._collect_routes(prefix, result)

    def __repr__(self) -> str:
        return f"<FrozenRouter routes={len(self._routes)} scopes={len(self._scopes)}>"


class Router:
    """A command router which itself satisfies ``Runner``.

    Mutable during setup. Frozen on the first ``run()`` or ``freeze()``.

    Usage::

        router = Router()
        router.use(LoggingMiddleware())

        @router.route("")
        def hello(ctx: Context) -> None:
            ctx.println("Hello!")

        @router.branch("post")
        def _(r: Router) -> None:
            r.route("stdin", post_from_stdin)

        clir.run(router)

    Rules enforced at the offending call with ``ConfigurationError``:
        - a pattern may be registered only once per router (see ``Pattern``
          for what counts as the same pattern);
        - middleware must be added before the first route;
        - nothing may be added once the router is frozen.

    Thread safety:
        The setup phase is single-threaded. The freeze transition uses a
        Lock + double-check so exactly one thread compiles the tree, even
        when several threads dispatch concurrently on first use.
    """

    __slots__ = (
        "_compiled",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_parent",
        "_patterns",
        "_route_middleware",
        "_runners",
        "_scopes",
    )

    def __init__(self) -> None:
        self._patterns: list[Pattern] = []
        self._runners: dict[Pattern, Runner] = {}
        self._route_middleware: dict[Pattern, tuple[Middleware, ...]] = {}
        self._middleware: list[Middleware] = []
        self._scopes: list[Router] = []
        self._parent: Router | None = None
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Set by freeze()
        self._compiled: FrozenRouter | None = None

    # -- Route registration --

    def route(
        self,
        pattern: PatternLike,
        runner: Runner | RunnerCallable | None = None,
        *,
        middleware: Sequence[Middleware] = (),
    ) -> Any:
        """Register *runner* for *pattern*.

        Called without a runner, returns a decorator::

            @router.route(r"(\\d+)")
            def show(ctx: Context) -> None:
                ctx.println("item", ctx.matches[1])

        Args:
            pattern: ``""`` for the root, a literal token, a regular
                expression string, a compiled ``re.Pattern``, or a ``Pattern``.
            runner: A ``Runner``, a plain ``f(ctx)`` function, or a ``Router``.
            middleware: Middleware for this route only. It runs after the
                router's own middleware, closest to the runner.
        """
        if runner is None:

            def decorator(func: RunnerCallable) -> RunnerCallable:
                self.route(pattern, func, middleware=middleware)
                return func

            return decorator

        self._check_not_frozen()
        compiled = Pattern.compile(pattern)
        self._check_available(compiled)
        resolved = as_runner(runner)
        if isinstance(resolved, Router):
            self._adopt(resolved)

        self._patterns.append(compiled)
        self._runners[compiled] = resolved
        if middleware:
            self._route_middleware[compiled] = tuple(middleware)
        return None

    def branch(self, pattern: PatternLike, build: Build | None = None) -> Any:
        """Route *pattern* to a new child router populated by *build*.

        The child starts empty: it inherits no middleware and no routes.
        Returns the child router. Called without *build*, returns a
        decorator that does the same.
        """
        if build is None:

            def decorator(func: Build) -> Router:
                return self.branch(pattern, func)

            return decorator

        self._check_not_frozen()
        compiled = Pattern.compile(pattern)
        self._check_available(compiled)

        child = Router()
        build(child)
        self.route(compiled, child)
        return child

    def scope(self, build: Build) -> Router:
        """Add a child router that starts with a copy of this router's middleware.

        *build* adds further middleware and routes to the child. Scoped
        routers are tried in order, with the original arguments, only when
        no pattern on this router matches. Middleware added to this router
        later does not reach an existing scope.

        Returns the child router, so ``@router.scope`` works as a decorator.
        """
        self._check_not_frozen()
        child = Router()
        child._middleware = list(self._middleware)
        child._parent = self
        build(child)
        self._scopes.append(child)
        return child

    # -- Middleware --

    def use(self, *middleware: Middleware) -> None:
        """Add middleware for every route on this router.

        Must be called before the first route is registered. On the root
        router it covers the whole tree; inside a scope it covers that
        scope and its nested scopes.
        """
        self._check_not_frozen()
        if self._patterns:
            msg = (
                "Cannot add middleware after routes are registered. "
                "Call use() before route() or branch() on this router."
            )
            raise ConfigurationError(msg)
        for mw in middleware:
            if not callable(mw):
                msg = f"Middleware must be callable, got {type(mw).__name__!r}"
                raise ConfigurationError(msg)
        self._middleware.extend(middleware)

    # -- Runtime --

    def run(self, ctx: Context) -> None:
        """Freeze if needed, then dispatch *ctx*. See ``FrozenRouter.run``."""
        self.freeze().run(ctx)

    def freeze(self) -> FrozenRouter:
        """Compile this router and everything below it.

        Idempotent. After freezing, every build method raises
        ``ConfigurationError``.
        """
        if self._compiled is not None:
            return self._compiled
        with self._freeze_lock:
            if self._compiled is None:
                self._freeze()
            assert self._compiled is not None
            return self._compiled

    @property
    def routes(self) -> list[RouteInfo]:
        """Every leaf route in the tree. Freezes the router."""
        return self.freeze().routes

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Internal --

    def _freeze(self) -> None:
        """Compile into a FrozenRouter.

        MUST only be called while holding _freeze_lock.
        """
        self._frozen = True
        middleware = tuple(self._middleware)

        routes: list[tuple[Pattern, Runner, Runner]] = []
        for pattern in self._patterns:
            runner = self._runners[pattern]
            if isinstance(runner, Router):
                runner = runner.freeze()
            chain = compose((*middleware, *self._route_middleware.get(pattern, ())), runner)
            routes.append((pattern, runner, chain))

        scopes = tuple(scope.freeze() for scope in self._scopes)
        self._compiled = FrozenRouter(tuple(routes), scopes)
        logger.debug(
            "Froze router: %d routes, %d middleware, %d scopes",
            len(routes),
            len(middleware),
            len(scopes),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has been frozen. "
                "Register routes and middleware before the first run()."
            )
            raise ConfigurationError(msg)

    def _check_available(self, pattern: Pattern) -> None:
        if pattern in self._runners:
            msg = f"Route {pattern.source!r} is already registered on this router."
            raise ConfigurationError(msg)

    def _adopt(self, child: Router) -> None:
        """Take ownership of *child*, keeping the tree free of cycles and sharing."""
        if child._parent is not None:
            msg = "Router is already part of another command tree."
            raise ConfigurationError(msg)
        node: Router | None = self
        while node is not None:
            if node is child:
                msg = "Cannot register a router inside its own subtree."
                raise ConfigurationError(msg)
            node = node._parent
        child._parent = self

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "building"
        return (
            f"<Router {state} routes={len(self._patterns)} "
            f"middleware={len(self._middleware)} scopes={len(self._scopes)}>"
        )
