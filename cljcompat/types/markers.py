from __future__ import annotations


class Marker:
    """A named, falsy singleton used where "nothing" must not be confused with None."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self): return self.name
    def __bool__(self): return False

    # Markers are only equal to themselves
    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return hash((Marker, self.name))

    def __reduce__(self):
        return _marker, (self.name,)


# Keyword parameter that was neither supplied nor defaulted
ABSENT = Marker("ABSENT")
# Record field with no supplied value and no default
UNSET = Marker("UNSET")
# Result of a search that found nothing
NOT_FOUND = Marker("NOT_FOUND")

_MARKERS_BY_NAME = {m.name: m for m in (ABSENT, UNSET, NOT_FOUND)}


def _marker(name: str) -> Marker:
    return _MARKERS_BY_NAME[name]
