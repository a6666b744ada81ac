"""Absent-value marker for outer joins and empty aggregates.

Outer joins pad the unmatched side of a pair with NULL rather than with a
zero value, so that display and equality keep telling "missing" apart from
"zero" or "empty string".
"""

from __future__ import annotations

from typing import Any, Final


class NullType:
    """Singleton type of the NULL marker.

    NULL is falsy, hashable and equal only to itself. Comparisons other
    than equality are not defined, mirroring SQL where any ordering against
    NULL is unknown.
    """

    _instance: NullType | None = None

    __slots__ = ()

    def __new__(cls) -> NullType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NULL"

    def __str__(self) -> str:
        return "NULL"

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return other is self

    def __hash__(self) -> int:
        return hash(NullType)

    def __reduce__(self) -> tuple[type[NullType], tuple[()]]:
        return (NullType, ())


NULL: Final = NullType()


def is_null(value: Any) -> bool:
    """Return True for the NULL marker and for None."""
    return value is NULL or value is None
