"""Locate a command tree from a ``module:path`` string for ``clir routes``.

``path`` may be dotted (``myapp.cli:commands.router``) and defaults to
``router``. Whatever it names is accepted if it can list its routes, so
a ``Router``, a ``FrozenRouter`` or any object with a ``routes``
property of ``RouteInfo`` values will do. Anything else that is
callable, a ``Router`` subclass included, is called once with no
arguments to build the tree.
"""

import importlib
import logging
from typing import Protocol, runtime_checkable

from clir.routing.router import RouteInfo

logger = logging.getLogger("clir.cli")

DEFAULT_ATTRIBUTE = "router"


@runtime_checkable
class RouteTree(Protocol):
    """Anything that can list the leaf routes below it."""

    @property
    def routes(self) -> list[RouteInfo]: ...


def _is_tree(obj: object) -> bool:
    # A class has a ``routes`` attribute too; only instances are trees.
    return not isinstance(obj, type) and isinstance(obj, RouteTree)


def resolve_router(target: str) -> RouteTree:
    """Import *target* and return the command tree it names.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If an attribute along the path does not exist.
        TypeError: If the object is not a command tree and does not build one.
    """
    module_name, _, path = target.partition(":")
    obj: object = importlib.import_module(module_name)
    for name in (path or DEFAULT_ATTRIBUTE).split("."):
        obj = getattr(obj, name)

    if _is_tree(obj):
        return obj  # type: ignore[return-value]

    if not callable(obj):
        msg = f"{target!r} is a {type(obj).__name__}, not a command tree with routes"
        raise TypeError(msg)

    logger.debug("Building command tree by calling %r", obj)
    try:
        built = obj()
    except Exception as exc:
        msg = f"Building the command tree from {target!r} failed: {exc}"
        raise TypeError(msg) from exc

    if not _is_tree(built):
        msg = f"{target!r} built a {type(built).__name__}, not a command tree with routes"
        raise TypeError(msg)
    return built
