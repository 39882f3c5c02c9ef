"""Concrete sequence representations.

Two immutable variants share one observable behaviour:

- ``LinkedSequence``: a chain of cons cells. Taking the tail is O(1), indexing
  walks the chain. There is exactly one empty LinkedSequence,
  ``LinkedSequence.EMPTY``, and the tail of it is itself.
- ``IndexedSequence``: a tuple-backed vector with O(1) indexing and length.

Both compare element-wise with each other and with Python lists and tuples,
so ``linked(1, 2) == indexed(1, 2) == [1, 2]``.
"""

from __future__ import annotations

from io import StringIO
from collections.abc import Iterable, Iterator

from cljcompat import LispValue


class _SequenceBase:
    """Equality, hashing and printing shared by both variants."""

    __slots__ = ()

    def __iter__(self) -> Iterator[LispValue]:
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, (_SequenceBase, list, tuple)):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self, other))

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self) -> int:
        # Matches tuple hashing so equal sequences of either variant collide
        return hash(tuple(self))

    def _write_items(self, buffer: StringIO) -> None:
        buffer.write(" ".join(repr(x) for x in self))


class LinkedSequence(_SequenceBase):
    """Singly linked, immutable list built from cons cells."""

    __slots__ = ("_head", "_tail", "_count")

    EMPTY: LinkedSequence

    def __init__(self, head: LispValue = None, tail: LinkedSequence | None = None, _count: int = 0):
        # Use LinkedSequence.from_iterable / cons; this is the raw cell constructor
        self._head = head
        self._tail = tail
        self._count = _count

    @classmethod
    def from_iterable(cls, items: Iterable[LispValue]) -> LinkedSequence:
        result = cls.EMPTY
        for item in reversed(list(items)):
            result = result.cons(item)
        return result

    def cons(self, head: LispValue) -> LinkedSequence:
        """Return a new sequence with ``head`` in front of this one."""
        return LinkedSequence(head, self, self._count + 1)

    @property
    def head(self) -> LispValue:
        return self._head

    @property
    def tail(self) -> LinkedSequence:
        # The tail of the empty sequence is the empty sequence
        return self._tail if self._tail is not None else LinkedSequence.EMPTY

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def __iter__(self) -> Iterator[LispValue]:
        cell = self
        while cell._count:
            yield cell._head
            cell = cell._tail

    def __reduce__(self):
        return LinkedSequence.from_iterable, (tuple(self),)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(")
            self._write_items(buffer)
            buffer.write(")")
            return buffer.getvalue()


LinkedSequence.EMPTY = LinkedSequence()


class IndexedSequence(_SequenceBase):
    """Random-access immutable vector backed by a tuple."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[LispValue] = ()):
        self._items: tuple = tuple(items)

    @property
    def items(self) -> tuple:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[LispValue]:
        return iter(self._items)

    def __reduce__(self):
        return IndexedSequence, (self._items,)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("[")
            self._write_items(buffer)
            buffer.write("]")
            return buffer.getvalue()


Sequence = LinkedSequence | IndexedSequence
