"""Multi-arity callables built on bind_call.

    multiarity = MultiFn("multiarity")

    @multiarity.variant("x")
    def _(x):
        return multiarity(x, 1, 2)

    @multiarity.variant("x", "y")
    def _(x, y):
        return multiarity(x, y, 2)

    @multiarity.variant("x", "y", "z")
    def _(x, y, z):
        return [x, y, z]

Python positional arguments pick the variant; Python keyword arguments form
the keyword region. A body may return ``recur(...)`` instead of calling its
own MultiFn, in which case the call is re-dispatched by a trampoline loop and
the Python stack does not grow.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from cljcompat import BodyFn, LispValue
from cljcompat.config import BindOptions
from cljcompat.binding.bind import bind_call
from cljcompat.binding.shape import ParameterShape, check_arities
from cljcompat.types.keyword import Keyword

logger = logging.getLogger(__name__)


class TailCall:
    """A pending call handed back to the trampoline in MultiFn.__call__."""

    __slots__ = ("fn", "args", "kwargs")

    def __init__(self, fn, args: tuple, kwargs: dict):
        self.fn = fn
        self.args = args
        self.kwargs = kwargs

    def __repr__(self) -> str:
        target = "recur" if self.fn is None else getattr(self.fn, "name", repr(self.fn))
        return f"TailCall({target}, {self.args!r}, {self.kwargs!r})"


def recur(*args: LispValue, **kwargs: LispValue) -> TailCall:
    """Re-enter the current MultiFn with new arguments, in constant stack space."""
    return TailCall(None, args, kwargs)


def tail_call(fn, *args: LispValue, **kwargs: LispValue) -> TailCall:
    """Like recur, but jumps to ``fn`` (e.g. for mutually recursive MultiFns)."""
    return TailCall(fn, args, kwargs)


class MultiFn:
    """A named callable with one body per ParameterShape variant."""

    __slots__ = ("name", "options", "_variants")

    def __init__(self, name: str, options: BindOptions | None = None):
        self.name = name
        self.options = options
        self._variants: list[tuple[ParameterShape, BodyFn]] = []

    @property
    def shapes(self) -> tuple[ParameterShape, ...]:
        return tuple(shape for shape, _ in self._variants)

    def add_variant(self, shape: ParameterShape, body: BodyFn) -> None:
        """Register ``body`` for ``shape``; the variant set is re-validated."""
        check_arities(self.shapes + (shape,))
        self._variants.append((shape, body))

    def variant(
        self,
        *required: str,
        rest: str | None = None,
        keywords: Mapping[str | Keyword, LispValue] | Iterable[str | Keyword] | None = None,
    ):
        """Decorator form of add_variant."""
        shape = ParameterShape(*required, rest=rest, keywords=keywords)

        def register(body: BodyFn) -> BodyFn:
            self.add_variant(shape, body)
            return body

        return register

    def _body_for(self, shape: ParameterShape) -> BodyFn:
        for candidate, body in self._variants:
            if candidate is shape:
                return body
        raise LookupError(f"{self.name} has no body for {shape!r}")

    def invoke(self, args: Iterable[LispValue], kwargs: Mapping[str, LispValue]) -> LispValue:
        """Bind and run a single step; may return a TailCall."""
        resolved = bind_call(self.shapes, args, kwargs, options=self.options)
        return self._body_for(resolved.shape)(**resolved)

    def __call__(self, *args: LispValue, **kwargs: LispValue) -> LispValue:
        fn = self
        result = fn.invoke(args, kwargs)
        while isinstance(result, TailCall):
            if result.fn is not None:
                fn = result.fn
            logger.debug("trampoline: %s%r", getattr(fn, "name", fn), result.args)
            if isinstance(fn, MultiFn):
                result = fn.invoke(result.args, result.kwargs)
            else:
                result = fn(*result.args, **result.kwargs)
        return result

    def __repr__(self) -> str:
        return f"<MultiFn {self.name} " + " ".join(repr(s) for s in self.shapes) + ">"
