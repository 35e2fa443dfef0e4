"""Command patterns — literal tokens and anchored regular expressions.

A pattern matches at most one argument token:

    ""          -> root: matches only when no arguments remain
    "get"       -> literal: matches the token "get"
    r"\\d+"      -> regex: ``fullmatch`` against the token
    re.compile  -> regex, whatever its source looks like

A string counts as a literal when it contains no regular-expression
metacharacters. Use ``Pattern.literal()`` to match a string such as
``"v1.2"`` exactly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ROOT = ""

_METACHARACTERS = frozenset(".^$*+?{}[]\\|()")


@dataclass(frozen=True, slots=True)
class Pattern:
    """A compiled command pattern. Immutable after creation.

    ``regex`` is ``None`` for the root pattern and for literals. Two
    patterns are equal when they have the same source, are both literal
    or both regex, and any regexes share their flags.
    """

    source: str
    regex: re.Pattern[str] | None = None

    @classmethod
    def compile(cls, pattern: str | re.Pattern[str] | Pattern) -> Pattern:
        """Build a Pattern from a string, a compiled regex, or a Pattern.

        Raises ``re.error`` if the string is not a valid regular expression.
        """
        if isinstance(pattern, Pattern):
            return pattern
        if isinstance(pattern, re.Pattern):
            return cls(source=pattern.pattern, regex=pattern)
        if _METACHARACTERS.isdisjoint(pattern):
            return cls(source=pattern)
        return cls(source=pattern, regex=re.compile(pattern))

    @classmethod
    def literal(cls, text: str) -> Pattern:
        """A pattern that matches *text* exactly, metacharacters included."""
        return cls(source=text)

    @property
    def is_root(self) -> bool:
        return self.regex is None and self.source == ROOT

    @property
    def is_regex(self) -> bool:
        return self.regex is not None

    def match(self, token: str | None) -> tuple[str, ...] | None:
        """Match one token (``None`` when no arguments remain).

        Returns the captures on success: ``()`` for root, the full match
        followed by each group for literals and regexes. Returns ``None``
        when the pattern does not match.
        """
        if self.regex is None:
            if self.source == ROOT:
                return () if token is None else None
            return (token,) if token == self.source else None

        if token is None:
            return None
        m = self.regex.fullmatch(token)
        if m is None:
            return None
        return (m.group(0), *(g or "" for g in m.groups()))

    def __str__(self) -> str:
        return self.source
