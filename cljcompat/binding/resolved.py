from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from cljcompat import LispValue


class ResolvedArguments(Mapping):
    """Immutable name -> value mapping produced by bind_call and destructure.

    Values are reachable by item or attribute: ``args["age"]`` or ``args.age``.
    ``shape`` is the ParameterShape variant that was selected, when there is one.
    Attribute reads lose to methods and ``shape``: a binding named ``get`` or
    ``shape`` is only reachable as ``args["get"]``.
    """

    __slots__ = ("_bindings", "shape")

    def __init__(self, bindings: Mapping[str, LispValue], shape=None):
        object.__setattr__(self, "_bindings", MappingProxyType(dict(bindings)))
        object.__setattr__(self, "shape", shape)

    def __getitem__(self, name: str) -> LispValue:
        return self._bindings[name]

    def __getattr__(self, name: str) -> LispValue:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._bindings[name]
        except KeyError:
            raise AttributeError(f"No binding named {name}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __setattr__(self, name, value):
        raise AttributeError("ResolvedArguments is immutable")

    def __eq__(self, other) -> bool:
        if isinstance(other, ResolvedArguments):
            return self._bindings == other._bindings
        if type(other) is dict:
            return self._bindings == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._bindings.items()))

    def __repr__(self) -> str:
        return "ResolvedArguments(" + ", ".join(f"{k}={v!r}" for k, v in self._bindings.items()) + ")"
