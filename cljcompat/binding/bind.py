from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from cljcompat import LispValue
from cljcompat.config import BindOptions, get_bind_options
from cljcompat.errors import ArityMismatch, MalformedKeywordArgs, UnknownKeyword
from cljcompat.binding.resolved import ResolvedArguments
from cljcompat.binding.shape import Default, ParameterShape, check_arities
from cljcompat.types.keyword import Keyword, keyword_name
from cljcompat.types.markers import ABSENT
from cljcompat.types.sequence import LinkedSequence

logger = logging.getLogger(__name__)


def select_shape(shapes: Iterable[ParameterShape], k: int) -> ParameterShape:
    """Pick the variant for ``k`` positional arguments.

    An exact fixed-count match wins; otherwise the variadic variant is used
    when it needs no more than ``k`` positionals.
    """
    shapes = tuple(shapes)
    for shape in shapes:
        if not shape.is_variadic and shape.fixed == k:
            return shape
    for shape in shapes:
        if shape.is_variadic and shape.fixed <= k:
            return shape
    arities = sorted(f"{s.fixed}+" if s.is_variadic else str(s.fixed) for s in shapes)
    raise ArityMismatch(f"No variant accepts {k} positional argument(s); declared arities: {arities}")


def pairs_to_mapping(remainder: Iterable[LispValue]) -> dict[str, LispValue]:
    """Read an alternating ``key value key value ...`` region into a dict.

    Keys are Keywords or strings (``":age"`` and ``"age"`` are the same key).
    When a key repeats, the last value wins.
    """
    items = list(remainder)
    if len(items) % 2 != 0:
        raise MalformedKeywordArgs(f"Keyword arguments must be in pairs; dangling {items[-1]!r}")
    supplied: dict[str, LispValue] = {}
    for key, value in zip(items[::2], items[1::2]):
        if not isinstance(key, (Keyword, str)):
            raise MalformedKeywordArgs(f"Expected a keyword like :name in keyword arguments, got {key!r}")
        supplied[keyword_name(key)] = value
    return supplied


def resolve_keywords(
    spec: Mapping[str, LispValue],
    supplied: Mapping,
    bound: Mapping[str, LispValue] | None = None,
    strict: bool = False,
    missing: LispValue = ABSENT,
) -> dict[str, LispValue]:
    """Fill every name in ``spec`` from ``supplied``, then its default, then ``missing``.

    ``spec`` maps names to defaults; ABSENT means "no default". A Default
    expression is evaluated with a read-only view of ``bound`` plus the
    keywords resolved before it. Keys of ``supplied`` outside ``spec`` are
    ignored, or rejected with UnknownKeyword when ``strict``.
    """
    try:
        supplied = {keyword_name(k): v for k, v in supplied.items()}
    except TypeError as exc:
        raise MalformedKeywordArgs(str(exc)) from exc
    unknown = [k for k in supplied if k not in spec]
    if unknown:
        if strict:
            raise UnknownKeyword(f"Unknown keyword argument(s): {[':' + k for k in unknown]}")
        logger.debug("ignoring unknown keyword argument(s) %s", unknown)

    scope: dict[str, LispValue] = dict(bound or {})
    resolved: dict[str, LispValue] = {}
    for name, default in spec.items():
        if name in supplied:
            value = supplied[name]
        elif isinstance(default, Default):
            value = default.evaluate(MappingProxyType(scope))
        elif default is not ABSENT:
            value = default
        else:
            value = missing
        resolved[name] = value
        scope[name] = value
    return resolved


def bind_call(
    shapes: ParameterShape | Iterable[ParameterShape],
    positionals: Iterable[LispValue] = (),
    remainder: Iterable[LispValue] | Mapping = (),
    options: BindOptions | None = None,
    strict_keywords: bool | None = None,
) -> ResolvedArguments:
    """Resolve a call's actual arguments against declared parameter shapes.

    - ``positionals`` choose the arity variant and fill its required names;
      any surplus goes to the variant's rest parameter as a LinkedSequence.
    - ``remainder`` is the keyword region: alternating key/value items, or a
      mapping when the caller already has one (e.g. Python ``**kwargs``).

    Raises ArityMismatch, MalformedKeywordArgs or (strict mode) UnknownKeyword.
    """
    if isinstance(shapes, ParameterShape):
        shapes = (shapes,)
    shapes = check_arities(shapes)
    if options is None:
        options = get_bind_options(strict_keywords)
    elif strict_keywords is not None:
        options = options.with_overrides(strict_keywords=strict_keywords)

    supplied = list(positionals)
    shape = select_shape(shapes, len(supplied))
    logger.debug("selected variant %r for %d positional argument(s)", shape, len(supplied))

    bindings: dict[str, LispValue] = dict(zip(shape.required, supplied))
    if shape.is_variadic:
        bindings[shape.rest] = LinkedSequence.from_iterable(supplied[shape.fixed:])

    if isinstance(remainder, Mapping):
        keyword_args = dict(remainder)
    else:
        keyword_args = pairs_to_mapping(remainder)
    bindings.update(
        resolve_keywords(shape.keywords, keyword_args, bound=bindings, strict=options.strict_keywords)
    )
    return ResolvedArguments(bindings, shape)
