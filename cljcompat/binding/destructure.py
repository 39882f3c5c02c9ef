"""Structural destructuring of sequences and maps.

Patterns mirror Clojure's binding forms:

    [x & others :as all]         Pattern("x", rest="others", whole="all")
    [[a b] c]                    Pattern(Pattern("a", "b"), "c")
    [x (y 0)]                    Pattern("x", Opt("y", 0))
    {:keys [name age]
     :or {age 18} :as m}         Keys("name", "age", defaults={"age": 18}, whole="m")
    [& {:keys [name]}]           Pattern(rest=Keys("name"))

The walk is depth-first and left to right. Each positional node takes the
first element of the remaining tail and moves on with ``rest``; a rest node
takes whatever tail is left; a whole node always sees the untouched input.
"""

from __future__ import annotations

from collections.abc import Mapping

from cljcompat import LispValue
from cljcompat.errors import InvalidPattern, MalformedKeywordArgs, NotASequence, PatternMismatch
from cljcompat.binding.bind import pairs_to_mapping, resolve_keywords
from cljcompat.binding.resolved import ResolvedArguments
from cljcompat.sequences import as_sequence, first, rest
from cljcompat.types.keyword import keyword_name
from cljcompat.types.markers import ABSENT


class Opt:
    """A positional node that may run past the end of the input."""

    __slots__ = ("target", "default")

    def __init__(self, target: str | Pattern | Keys, default: LispValue = ABSENT):
        self.target = target
        self.default = default

    def __repr__(self) -> str:
        return f"({_node_repr(self.target)} {self.default!r})"


class Pattern:
    """Sequential destructuring pattern."""

    __slots__ = ("items", "rest", "whole")

    def __init__(self, *items: str | Opt | Pattern | Keys, rest: str | Pattern | Keys | None = None, whole: str | None = None):
        self.items = tuple(items)
        self.rest = rest
        self.whole = whole
        _check_names(self)

    def __repr__(self) -> str:
        parts = [_node_repr(i) for i in self.items]
        if self.rest is not None:
            parts += ["&", _node_repr(self.rest)]
        if self.whole is not None:
            parts += [":as", self.whole]
        return "[" + " ".join(parts) + "]"


class Keys:
    """Map destructuring pattern; missing names take their default or ABSENT."""

    __slots__ = ("names", "defaults", "whole")

    def __init__(self, *names: str, defaults: Mapping[str, LispValue] | None = None, whole: str | None = None):
        self.names = tuple(keyword_name(n) for n in names)
        self.defaults = {keyword_name(k): v for k, v in (defaults or {}).items()}
        self.whole = whole
        stray = [k for k in self.defaults if k not in self.names]
        if stray:
            raise InvalidPattern(f"Defaults given for names not in :keys: {stray}")
        _check_names(self)

    def __repr__(self) -> str:
        text = "{:keys [" + " ".join(self.names) + "]"
        if self.defaults:
            text += " :or {" + ", ".join(f"{k} {v!r}" for k, v in self.defaults.items()) + "}"
        if self.whole is not None:
            text += f" :as {self.whole}"
        return text + "}"


def _node_repr(node) -> str:
    return node if isinstance(node, str) else repr(node)


def _collect_names(node, out: list[str]) -> None:
    if isinstance(node, str):
        out.append(node)
    elif isinstance(node, Opt):
        _collect_names(node.target, out)
    elif isinstance(node, Pattern):
        for item in node.items:
            _collect_names(item, out)
        if node.rest is not None:
            _collect_names(node.rest, out)
        if node.whole is not None:
            out.append(node.whole)
    elif isinstance(node, Keys):
        out.extend(node.names)
        if node.whole is not None:
            out.append(node.whole)
    else:
        raise InvalidPattern(f"Unsupported pattern node {node!r}")


def _check_names(pattern) -> None:
    names: list[str] = []
    _collect_names(pattern, names)
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise InvalidPattern(f"Name(s) bound more than once: {dupes}")


def _bind(node, value: LispValue, out: dict[str, LispValue]) -> None:
    if isinstance(node, str):
        out[node] = value
    elif isinstance(node, Pattern):
        _bind_sequence(node, value, out)
    elif isinstance(node, Keys):
        _bind_keys(node, value, out)
    else:
        raise InvalidPattern(f"Unsupported pattern node {node!r}")


def _bind_sequence(pattern: Pattern, value: LispValue, out: dict[str, LispValue]) -> None:
    try:
        tail = as_sequence(value)
    except NotASequence as exc:
        raise PatternMismatch(f"Pattern {pattern!r} expects a sequence, got {value!r}") from exc
    for item in pattern.items:
        if isinstance(item, Opt):
            if tail:
                _bind(item.target, first(tail), out)
                tail = rest(tail)
            elif item.default is not ABSENT:
                _bind(item.target, item.default, out)
            else:
                names: list[str] = []
                _collect_names(item.target, names)
                out.update(dict.fromkeys(names, ABSENT))
            continue
        if not tail:
            raise PatternMismatch(f"Pattern {pattern!r} expects more elements than {value!r} provides")
        _bind(item, first(tail), out)
        tail = rest(tail)
    if isinstance(pattern.rest, Keys):
        # [& {:keys [...]}] reads the tail as keyword pairs
        try:
            supplied = pairs_to_mapping(tail)
        except MalformedKeywordArgs as exc:
            raise PatternMismatch(f"Pattern {pattern!r} expects keyword pairs after &, got {tail!r}") from exc
        _bind_keys(pattern.rest, supplied, out)
    elif pattern.rest is not None:
        _bind(pattern.rest, tail, out)
    if pattern.whole is not None:
        out[pattern.whole] = value


def _bind_keys(pattern: Keys, value: LispValue, out: dict[str, LispValue]) -> None:
    if not isinstance(value, Mapping):
        raise PatternMismatch(f"Pattern {pattern!r} expects a mapping, got {value!r}")
    spec = {name: pattern.defaults.get(name, ABSENT) for name in pattern.names}
    out.update(resolve_keywords(spec, value, bound=out))
    if pattern.whole is not None:
        out[pattern.whole] = value


def destructure(pattern: str | Pattern | Keys, value: LispValue) -> ResolvedArguments:
    """Bind the names in ``pattern`` against ``value``.

    Raises PatternMismatch when a required positional node finds the input
    exhausted, or when a Keys pattern meets something that is not a mapping.
    """
    out: dict[str, LispValue] = {}
    _bind(pattern, value, out)
    return ResolvedArguments(out)
