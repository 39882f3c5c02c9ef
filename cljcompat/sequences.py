"""Sequence adapter: uniform read-only operations over linked and indexed sequences.

Every operation accepts either variant (and plain Python lists/tuples, which
are treated as indexed sequences) and, where it returns a sequence, returns
the variant it was given unless documented otherwise:

- ``rest`` of an empty sequence is an empty sequence of the same variant,
  never None and never an error.
- ``position`` reports a failed search with ``NOT_FOUND``, not an exception.
- ``nthrest`` and ``take`` always produce linked sequences, the way Clojure's
  ``nthrest``/``take`` produce seqs regardless of their input.
"""

from __future__ import annotations

from itertools import islice
from collections.abc import Callable, Iterable, Mapping

from cljcompat import LispValue
from cljcompat.errors import NotASequence, OutOfRange
from cljcompat.types.markers import NOT_FOUND
from cljcompat.types.sequence import IndexedSequence, LinkedSequence, Sequence

Predicate = Callable[[LispValue], object]


# -------------------------------
# Construction
# -------------------------------
def linked(*items: LispValue) -> LinkedSequence:
    """Build a linked sequence from the given elements: ``(list 'a 'b)``."""
    return LinkedSequence.from_iterable(items)


def indexed(*items: LispValue) -> IndexedSequence:
    """Build an indexed sequence from the given elements: ``[a b]``."""
    return IndexedSequence(items)


def empty_linked() -> LinkedSequence:
    return LinkedSequence.EMPTY


def as_sequence(value: LispValue) -> Sequence:
    """Coerce ``value`` to a sequence.

    Existing sequences are returned unchanged; lists, tuples and other finite
    iterables (except strings and mappings) become indexed sequences.
    """
    if isinstance(value, (LinkedSequence, IndexedSequence)):
        return value
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise NotASequence(f"Expected a sequence, got {value!r}")
    return IndexedSequence(value)


def _like(s: Sequence, items: Iterable[LispValue]) -> Sequence:
    """Build a sequence of the same variant as ``s``."""
    if isinstance(s, LinkedSequence):
        return LinkedSequence.from_iterable(items)
    return IndexedSequence(items)


# -------------------------------
# Core operations
# -------------------------------
def length(s) -> int:
    return len(as_sequence(s))


def is_empty(s) -> bool:
    return length(s) == 0


def first(s) -> LispValue:
    s = as_sequence(s)
    if not s:
        raise OutOfRange("first of an empty sequence")
    if isinstance(s, LinkedSequence):
        return s.head
    return s.items[0]


def rest(s) -> Sequence:
    """All elements after the first, as the same variant.

    ``rest`` of an empty sequence is an empty sequence, so
    ``rest(rest(empty_linked())) == empty_linked()``.
    """
    s = as_sequence(s)
    if isinstance(s, LinkedSequence):
        return s.tail
    return IndexedSequence(s.items[1:])


def nth(s, i: int) -> LispValue:
    s = as_sequence(s)
    if not 0 <= i < len(s):
        raise OutOfRange(f"Index {i} out of range for sequence of length {len(s)}")
    if isinstance(s, IndexedSequence):
        return s.items[i]
    cell = s
    for _ in range(i):
        cell = cell.tail
    return cell.head


def subseq(s, start: int, end: int | None = None) -> Sequence:
    """Half-open slice ``[start, end)``; ``end=None`` means to the end.

    Raises OutOfRange unless ``0 <= start <= end <= length(s)``.
    """
    s = as_sequence(s)
    n = len(s)
    if end is None:
        end = n
    if not 0 <= start <= n or not 0 <= end <= n or start > end:
        raise OutOfRange(f"Range [{start}, {end}) out of bounds for sequence of length {n}")
    if isinstance(s, IndexedSequence):
        return IndexedSequence(s.items[start:end])
    cell = s
    for _ in range(start):
        cell = cell.tail
    if end == n:
        # Shares the original tail
        return cell
    return LinkedSequence.from_iterable(islice(cell, end - start))


def position(s, predicate: Predicate) -> int | object:
    """Index of the first element satisfying ``predicate``, else NOT_FOUND.

    To search a sub-range compose with subseq and offset the result:
    ``position(subseq(s, 2), pred)``.
    """
    for i, item in enumerate(as_sequence(s)):
        if predicate(item):
            return i
    return NOT_FOUND


def append(a, b) -> Sequence:
    """Concatenate two sequences; the result has ``a``'s variant."""
    a = as_sequence(a)
    b = as_sequence(b)
    if isinstance(a, LinkedSequence):
        if not a:
            return b if isinstance(b, LinkedSequence) else LinkedSequence.from_iterable(b)
        # A linked ``b`` can be shared as the new tail
        tail = b if isinstance(b, LinkedSequence) else LinkedSequence.from_iterable(b)
        for item in reversed(list(a)):
            tail = tail.cons(item)
        return tail
    return IndexedSequence(a.items + tuple(b))


# -------------------------------
# Access helpers
# -------------------------------
def second(s) -> LispValue:
    return nth(s, 1)


def last(s) -> LispValue:
    """Last element; O(n) for linked sequences."""
    s = as_sequence(s)
    if not s:
        raise OutOfRange("last of an empty sequence")
    if isinstance(s, IndexedSequence):
        return s.items[-1]
    item = None
    for item in s:
        pass
    return item


def peek(s) -> LispValue:
    """The element a stack would pop: the tail end of an indexed sequence,
    the head of a linked one.
    """
    s = as_sequence(s)
    if not s:
        raise OutOfRange("peek of an empty sequence")
    if isinstance(s, IndexedSequence):
        return s.items[-1]
    return s.head


def nthrest(s, n: int) -> LinkedSequence:
    """Drop ``n`` elements, clamping at the end; always a linked sequence."""
    s = as_sequence(s)
    if isinstance(s, LinkedSequence):
        cell = s
        for _ in range(max(n, 0)):
            if not cell:
                break
            cell = cell.tail
        return cell
    return LinkedSequence.from_iterable(s.items[max(n, 0):])


def take(n: int, s) -> LinkedSequence:
    """First ``n`` elements, clamping at the end; always a linked sequence."""
    s = as_sequence(s)
    return LinkedSequence.from_iterable(islice(s, max(n, 0)))


# -------------------------------
# Predicates
# -------------------------------
def is_consp(value: LispValue) -> bool:
    """True for a non-empty linked sequence (CL's ``consp`` on proper lists)."""
    return isinstance(value, LinkedSequence) and len(value) > 0


def is_null(value: LispValue) -> bool:
    """True for None or an empty sequence (CL's ``null``)."""
    if value is None:
        return True
    if isinstance(value, (LinkedSequence, IndexedSequence, list, tuple)):
        return len(value) == 0
    return False


# -------------------------------
# Search
# -------------------------------
def index_of(s, value: LispValue) -> int | object:
    """``position`` by equality: ``index_of([7, 8, 9], 8) == 1``."""
    return position(s, lambda item: item == value)


def some(predicate: Predicate, s) -> LispValue:
    """First truthy ``predicate(item)`` result, or None."""
    for item in as_sequence(s):
        result = predicate(item)
        if result:
            return result
    return None


# -------------------------------
# Transformations
# -------------------------------
def map_seq(f: Callable[..., LispValue], s, *more) -> Sequence:
    """Apply ``f`` across one or more sequences, stopping at the shortest.

    ``map_seq(linked, linked("a", "b"), linked(1, 2))`` is ``((a 1) (b 2))``,
    as ``(map list '(a b) '(1 2))``. The result has the first sequence's variant.
    """
    s = as_sequence(s)
    return _like(s, (f(*xs) for xs in zip(s, *map(as_sequence, more))))


def filter_seq(predicate: Predicate, s) -> Sequence:
    s = as_sequence(s)
    return _like(s, (x for x in s if predicate(x)))


def remove_seq(predicate: Predicate, s) -> Sequence:
    """Keep the elements for which ``predicate`` is falsy."""
    s = as_sequence(s)
    return _like(s, (x for x in s if not predicate(x)))


def mapcat(f: Callable[..., Iterable[LispValue]], s, *more) -> Sequence:
    """Map ``f`` across the sequences like map_seq and concatenate the results."""
    s = as_sequence(s)
    return _like(s, (y for xs in zip(s, *map(as_sequence, more)) for y in as_sequence(f(*xs))))
