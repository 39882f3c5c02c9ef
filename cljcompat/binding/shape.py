"""Declared parameter shapes for multi-arity callables.

A ParameterShape is the Python rendering of one Clojure arity vector:

    [x y]                          ParameterShape("x", "y")
    [a b & args]                   ParameterShape("a", "b", rest="args")
    [& {:keys [name age]
        :or {age 18}}]             ParameterShape(keywords={"name": ABSENT, "age": 18})

Keyword defaults are plain values, or Default(fn) expressions that are
evaluated once per call with the bindings made so far.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Callable

from cljcompat import LispValue
from cljcompat.errors import InvalidShape
from cljcompat.types.keyword import Keyword, keyword_name
from cljcompat.types.markers import ABSENT

_REST_MARKERS = ("&", "&rest", "&body")
_KEY_MARKER = "&key"


class Default:
    """A default-value expression, evaluated lazily for each call.

    ``fn`` receives a read-only mapping of the names bound so far, so a default
    may refer to earlier parameters:

        Default(lambda bound: bound["age"] * 2)
    """

    __slots__ = ("fn",)

    def __init__(self, fn: Callable[[Mapping[str, LispValue]], LispValue]):
        self.fn = fn

    def evaluate(self, bound: Mapping[str, LispValue]) -> LispValue:
        return self.fn(bound)

    def __repr__(self) -> str:
        return f"Default({self.fn!r})"


def _keyword_spec(keywords) -> dict[str, LispValue]:
    if keywords is None:
        return {}
    if isinstance(keywords, Mapping):
        return {keyword_name(k): v for k, v in keywords.items()}
    return {keyword_name(k): ABSENT for k in keywords}


class ParameterShape:
    """Required positionals, an optional rest-capture and an optional keyword-spec."""

    __slots__ = ("required", "rest", "keywords")

    def __init__(
        self,
        *required: str,
        rest: str | None = None,
        keywords: Mapping[str | Keyword, LispValue] | Iterable[str | Keyword] | None = None,
    ):
        self.required: tuple[str, ...] = tuple(required)
        self.rest: str | None = rest
        self.keywords: dict[str, LispValue] = _keyword_spec(keywords)

        names = list(self.required) + ([rest] if rest is not None else []) + list(self.keywords)
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise InvalidShape(f"Duplicate parameter name(s): {dupes}")

    @classmethod
    def from_formals(cls, formals: Iterable) -> ParameterShape:
        """Parse a lambda-list such as ``["a", "b", "&", "args", "&key", ("age", 18)]``.

        ``&``/``&rest``/``&body`` must be followed by exactly one name; every
        entry after ``&key`` is a name or a ``(name, default)`` pair.
        """
        formals = list(formals)
        required: list[str] = []
        rest_name: str | None = None
        keywords: dict[str, LispValue] = {}

        while formals:
            formal = formals.pop(0)
            if formal in _REST_MARKERS:
                if not formals or formals[0] in _REST_MARKERS or formals[0] == _KEY_MARKER:
                    raise InvalidShape(f"Malformed parameter list: {formal} must be followed by a name")
                if rest_name is not None:
                    raise InvalidShape("Malformed parameter list: more than one rest parameter")
                rest_name = formals.pop(0)
            elif formal == _KEY_MARKER:
                for spec in formals:
                    if isinstance(spec, (tuple, list)):
                        if len(spec) != 2:
                            raise InvalidShape(f"Keyword spec must be (name, default), got {spec!r}")
                        keywords[keyword_name(spec[0])] = spec[1]
                    else:
                        keywords[keyword_name(spec)] = ABSENT
                formals = []
            elif rest_name is not None:
                raise InvalidShape(f"Positional parameter {formal} after the rest parameter")
            else:
                required.append(formal)

        return cls(*required, rest=rest_name, keywords=keywords)

    @property
    def fixed(self) -> int:
        """Number of required positional parameters."""
        return len(self.required)

    @property
    def is_variadic(self) -> bool:
        return self.rest is not None

    @property
    def names(self) -> tuple[str, ...]:
        extra = (self.rest,) if self.rest is not None else ()
        return self.required + extra + tuple(self.keywords)

    def accepts(self, k: int) -> bool:
        return k == self.fixed or (self.is_variadic and k >= self.fixed)

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, ParameterShape)
            and self.required == other.required
            and self.rest == other.rest
            and self.keywords == other.keywords
        )

    def __hash__(self) -> int:
        return hash((self.required, self.rest, tuple(self.keywords)))

    def __repr__(self) -> str:
        parts = list(self.required)
        if self.rest is not None:
            parts += ["&", self.rest]
        if self.keywords:
            keys = " ".join(self.keywords)
            defaults = {k: v for k, v in self.keywords.items() if v is not ABSENT}
            spec = f"{{:keys [{keys}]"
            if defaults:
                spec += " :or {" + ", ".join(f"{k} {v!r}" for k, v in defaults.items()) + "}"
            parts.append(spec + "}")
        return "[" + " ".join(parts) + "]"


def check_arities(shapes: Iterable[ParameterShape]) -> tuple[ParameterShape, ...]:
    """Validate a set of arity variants and return them as a tuple.

    Rules (the same ones Clojure enforces for ``defn``):
    - no two fixed-arity variants share a positional count
    - at most one variant has a rest-capture
    - no fixed-arity variant takes more positionals than the variadic one
    """
    shapes = tuple(shapes)
    if not shapes:
        raise InvalidShape("At least one parameter shape is required")

    variadic = [s for s in shapes if s.is_variadic]
    if len(variadic) > 1:
        raise InvalidShape("Only one variant may declare a rest parameter")

    seen: dict[int, ParameterShape] = {}
    for shape in shapes:
        if shape.is_variadic:
            continue
        if shape.fixed in seen:
            raise InvalidShape(f"Two variants take {shape.fixed} positional argument(s): {seen[shape.fixed]} and {shape}")
        seen[shape.fixed] = shape

    if variadic:
        longest = max(seen, default=0)
        if longest > variadic[0].fixed:
            raise InvalidShape(
                f"Fixed-arity variant with {longest} parameter(s) exceeds the variadic variant {variadic[0]}"
            )
    return shapes
