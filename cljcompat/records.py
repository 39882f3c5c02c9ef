"""Immutable records with default field values.

``construct`` fills every declared field by precedence: the supplied value,
then the default, then (for required fields) MissingRequiredField, and
otherwise the UNSET marker. ``defrecord`` wraps that in a reusable type with
the three constructors Clojure generates or idiomatically adds:

    Person = defrecord("Person", ["name", "weight", "position"],
                       defaults={"position": Keyword("employee")})
    joe = Person("Joe", 190, Keyword("manager"))          # ->Person
    fred = Person.from_map({"name": "Fred"})               # map->Person
    tim = Person.with_defaults({"name": "Tim", "weight": 152})
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from io import StringIO

from cljcompat import LispValue
from cljcompat.binding.bind import resolve_keywords
from cljcompat.errors import ArityMismatch, MissingRequiredField, UnknownField
from cljcompat.types.keyword import keyword_name
from cljcompat.types.markers import ABSENT, UNSET


class Record(Mapping):
    """A named, fixed-field immutable value.

    Fields are readable as ``rec["name"]``, ``rec[Keyword("name")]`` or
    ``rec.name``. Reading a field the record does not declare raises
    UnknownField; unfilled fields read as UNSET. Attribute reads lose to the
    Record API, so fields named ``fields``, ``get``, ``assoc``, ``keys`` or
    ``type_name`` are read by item only.
    """

    __slots__ = ("_type_name", "_values")

    def __init__(self, type_name: str, values: Mapping[str, LispValue]):
        object.__setattr__(self, "_type_name", type_name)
        object.__setattr__(self, "_values", dict(values))

    @property
    def type_name(self) -> str:
        return self._type_name

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._values)

    def __getitem__(self, field) -> LispValue:
        name = keyword_name(field)
        try:
            return self._values[name]
        except KeyError:
            raise UnknownField(f"{self._type_name} has no field {name}") from None

    def __getattr__(self, name: str) -> LispValue:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __setattr__(self, name, value):
        raise AttributeError(f"{self._type_name} is immutable")

    def __contains__(self, field) -> bool:
        try:
            return keyword_name(field) in self._values
        except TypeError:
            return False

    def get(self, field, default: LispValue = None) -> LispValue:
        return self[field] if field in self else default

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def assoc(self, **changes: LispValue) -> Record:
        """Return a copy with ``changes`` applied; only declared fields may change."""
        for name in changes:
            if name not in self._values:
                raise UnknownField(f"{self._type_name} has no field {name}")
        return Record(self._type_name, {**self._values, **changes})

    def to_dict(self) -> dict[str, LispValue]:
        return dict(self._values)

    def __eq__(self, other) -> bool:
        if isinstance(other, Record):
            return self._type_name == other._type_name and self._values == other._values
        if type(other) is dict:
            return self._values == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._type_name, tuple(self._values.items())))

    def __reduce__(self):
        return Record, (self._type_name, self._values)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"#{self._type_name}{{")
            buffer.write(", ".join(f":{k} {v!r}" for k, v in self._values.items()))
            buffer.write("}")
            return buffer.getvalue()


def _names(keys: Iterable) -> list[str]:
    return [keyword_name(k) for k in keys]


def construct(
    partial: Mapping,
    defaults: Mapping | None = None,
    required: Iterable = (),
    fields: Iterable | None = None,
    type_name: str = "Record",
) -> Record:
    """Build a Record from supplied values and defaults.

    ``fields`` fixes the declared field list; without it the fields are the
    keys of ``partial``, then ``defaults``, then ``required``. Supplying a
    value or default for an undeclared field raises UnknownField.
    """
    partial = dict(zip(_names(partial), partial.values()))
    defaults = dict(zip(_names(defaults or {}), (defaults or {}).values()))
    required = _names(required)

    if fields is None:
        declared = list(dict.fromkeys([*partial, *defaults, *sorted(required)]))
    else:
        declared = list(dict.fromkeys(_names(fields)))
        undeclared = [k for k in [*partial, *defaults, *required] if k not in declared]
        if undeclared:
            raise UnknownField(f"{type_name} has no field(s) {sorted(set(undeclared))}")

    missing = sorted(k for k in required if k not in partial and k not in defaults)
    if missing:
        raise MissingRequiredField(f"{type_name} requires field(s) {missing}")

    spec = {name: defaults.get(name, ABSENT) for name in declared}
    return Record(type_name, resolve_keywords(spec, partial, missing=UNSET))


class RecordType:
    """A reusable record declaration: name, ordered fields, defaults, required set."""

    __slots__ = ("name", "fields", "defaults", "required")

    def __init__(
        self,
        name: str,
        fields: Iterable,
        defaults: Mapping | None = None,
        required: Iterable = (),
    ):
        self.name = name
        self.fields: tuple[str, ...] = tuple(dict.fromkeys(_names(fields)))
        self.defaults: dict[str, LispValue] = dict(zip(_names(defaults or {}), (defaults or {}).values()))
        self.required: frozenset[str] = frozenset(_names(required))
        stray = [k for k in [*self.defaults, *self.required] if k not in self.fields]
        if stray:
            raise UnknownField(f"{name} has no field(s) {sorted(set(stray))}")

    def __call__(self, *values: LispValue) -> Record:
        """Positional constructor; one value per field, in declaration order."""
        if len(values) != len(self.fields):
            raise ArityMismatch(f"{self.name} constructor expects {len(self.fields)} args, got {len(values)}")
        return Record(self.name, dict(zip(self.fields, values)))

    def from_map(self, field_map: Mapping) -> Record:
        """Build from a mapping without applying defaults; absent fields are UNSET."""
        return construct(field_map, None, self.required, self.fields, self.name)

    def with_defaults(self, field_map: Mapping) -> Record:
        """Build from a mapping, filling gaps from the declared defaults."""
        return construct(field_map, self.defaults, self.required, self.fields, self.name)

    def accessor(self, field):
        """Return a one-argument function reading ``field``, like ``Person-name``."""
        name = keyword_name(field)
        if name not in self.fields:
            raise UnknownField(f"{self.name} has no field {name}")

        def read(record: Record) -> LispValue:
            return record[name]

        read.__name__ = f"{self.name}-{name}"
        return read

    def is_instance(self, value: LispValue) -> bool:
        return isinstance(value, Record) and value.type_name == self.name and value.fields == self.fields

    def __repr__(self) -> str:
        return f"<RecordType {self.name} [{' '.join(self.fields)}]>"


def defrecord(
    name: str,
    fields: Iterable,
    defaults: Mapping | None = None,
    required: Iterable = (),
) -> RecordType:
    return RecordType(name, fields, defaults, required)


__all__ = ["Record", "RecordType", "construct", "defrecord"]
