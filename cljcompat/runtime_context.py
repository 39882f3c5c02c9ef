"""Explicit replacement for dynamically scoped variables.

A Clojure ``^:dynamic`` var rebound with ``binding`` is visible to everything
called inside the form and reverts when the form exits. Here the same effect
comes from passing a DynamicContext down the call chain: ``ctx.binding(...)``
returns a child context carrying the overrides, and the parent is untouched,
so leaving the nested scope "reverts" simply by going back to using the parent.

    root = DynamicContext(very_important=False)
    add_hello(root, "joe")                                   # "hello joe"
    loud = root.binding(very_important=True)
    add_hello(loud, "mabe")                                  # "VERY IMPORTANT!!! hello mabe"
    add_hello(loud.binding(very_important=False), "sam")     # "hello sam"
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from io import StringIO
from typing import Optional

from cljcompat import LispValue


class DynamicContext(Mapping):
    """Immutable chain of name -> value frames; inner frames shadow outer ones.

    ``ctx.name`` is shorthand for ``ctx["name"]``. Methods and properties win
    over bindings of the same name, so read ``ctx["outer"]`` by item.
    """

    __slots__ = ("_vars", "_outer")

    def __init__(self, outer: Optional[DynamicContext] = None, /, **bindings: LispValue):
        self._vars: dict[str, LispValue] = dict(bindings)
        self._outer: DynamicContext | None = outer

    @property
    def outer(self) -> DynamicContext | None:
        return self._outer

    def binding(self, **overrides: LispValue) -> DynamicContext:
        """Return a child context in which ``overrides`` shadow this one."""
        return DynamicContext(self, **overrides)

    def find(self, name: str) -> Optional[DynamicContext]:
        ctx: Optional[DynamicContext] = self
        while ctx is not None:
            if name in ctx._vars:
                return ctx
            ctx = ctx._outer
        return None

    def __getitem__(self, name: str) -> LispValue:
        ctx = self.find(name)
        if ctx is None:
            raise KeyError(name)
        return ctx._vars[name]

    def __getattr__(self, name: str) -> LispValue:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"Unbound dynamic variable {name}") from None

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        ctx: Optional[DynamicContext] = self
        while ctx is not None:
            for name in ctx._vars:
                if name not in seen:
                    seen.add(name)
                    yield name
            ctx = ctx._outer

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<DynamicContext chain: ")
            frames = []
            ctx = self
            while ctx is not None:
                frames.append("{" + ", ".join(f"{k}: {v!r}" for k, v in ctx._vars.items()) + "}")
                ctx = ctx._outer
            buffer.write(" -> ".join(frames))
            buffer.write(">")
            return buffer.getvalue()
