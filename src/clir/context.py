"""Invocation context passed down a command chain.

Provides:
- ``Context``: the immutable bundle of remaining arguments, streams,
  cancel event, and the captures of the most recent pattern match.

Every layer that changes something builds a new Context with
``ctx.replace(...)`` before calling onward. A Context is never modified
in place, so the value an outer middleware holds stays exactly as it
was when it called ``next``.

Thread safety:
    Contexts are frozen. Concurrent dispatches on one router each thread
    their own Context values. No locks needed.
"""

from __future__ import annotations

import dataclasses
import io
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TextIO

from clir.errors import Cancelled


def _empty_values() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Context:
    """Everything a runner needs for one invocation.

    Usage::

        ctx = Context(args=("post", "stdin"), out=sys.stdout)
        router.run(ctx)

    Streams default to in-memory buffers so a bare ``Context()`` is safe
    to dispatch in tests.
    """

    args: tuple[str, ...] = ()
    out: TextIO = field(default_factory=io.StringIO)
    err: TextIO = field(default_factory=io.StringIO)
    in_: TextIO = field(default_factory=io.StringIO)
    cancel: threading.Event = field(default_factory=threading.Event)
    matches: tuple[str, ...] = ()
    values: Mapping[str, Any] = field(default_factory=_empty_values)

    def __post_init__(self) -> None:
        # Callers may pass lists; store tuples so nothing downstream can
        # mutate what an upstream layer still holds.
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
        if not isinstance(self.matches, tuple):
            object.__setattr__(self, "matches", tuple(self.matches))
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    # -- Derivation --

    def replace(self, **changes: Any) -> Context:
        """Return a new Context with *changes* applied."""
        return dataclasses.replace(self, **changes)

    def with_args(self, args: Iterable[str]) -> Context:
        """Return a new Context with a different remaining-argument list."""
        return dataclasses.replace(self, args=tuple(args))

    def with_values(self, **values: Any) -> Context:
        """Return a new Context with *values* merged over the current ones."""
        return dataclasses.replace(self, values={**self.values, **values})

    # -- Accessors --

    @property
    def token(self) -> str | None:
        """The first remaining argument, or ``None`` when none are left."""
        return self.args[0] if self.args else None

    def value(self, name: str, default: Any = None) -> Any:
        """Get a value stored by middleware (flags, positional args)."""
        return self.values.get(name, default)

    @property
    def cancelled(self) -> bool:
        return self.cancel.is_set()

    def check_cancelled(self) -> None:
        """Raise ``Cancelled`` if the invocation has been cancelled.

        Long-running handlers call this between units of work.
        """
        if self.cancel.is_set():
            raise Cancelled()

    # -- Output helpers --

    def println(self, *values: object) -> None:
        """Print *values* space-separated to the output stream."""
        print(*values, file=self.out)

    def errorln(self, *values: object) -> None:
        """Print *values* space-separated to the error stream."""
        print(*values, file=self.err)
