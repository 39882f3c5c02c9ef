from __future__ import annotations
import sys


class Keyword:
    """A self-evaluating name such as ``:janitor``, interned for cheap equality."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        if name.startswith(":"):
            name = name[1:]
        self.id = sys.intern(name)

    def __eq__(self, other: Keyword) -> bool:
        return isinstance(other, Keyword) and self.id == other.id

    def __hash__(self) -> int:
        return hash((Keyword, self.id))

    def __call__(self, mapping, default=None):
        """Keyword-as-function lookup: ``Keyword("k")(m)`` is ``(:k m)``."""
        if self in mapping:
            return mapping[self]
        if self.id in mapping:
            return mapping[self.id]
        return default

    def __repr__(self):
        return f"Keyword({self.id!r})"

    def __str__(self):
        return f":{self.id}"


def keyword_name(key) -> str:
    """Return the bare name for a Keyword or a (possibly colon-prefixed) string."""
    if isinstance(key, Keyword):
        return key.id
    if isinstance(key, str):
        return key[1:] if key.startswith(":") else key
    raise TypeError(f"Expected a keyword or a string, got {key!r}")
