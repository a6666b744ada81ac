"""Set operations with set semantics: union, intersect, except.

Rows are compared by their column values, not by identity, and results
are duplicate-free, keeping the first occurrence of every row. Both
operands must share a row type.

Column values need not be hashable: keys holding lists or other
unhashable values are matched by equality with a linear scan.
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, TypeVar

from relalg.domain.entities import Row, Table
from relalg.domain.value_objects import SchemaMismatchError

T = TypeVar("T", bound=Row)
V = TypeVar("V")

_MISSING = object()


def row_key(row: Row) -> tuple[Any, ...]:
    """Structural identity of a row: its column values."""
    return tuple(row.values())


class KeyIndex(Generic[V]):
    """Insertion-ordered mapping from structural keys to values.

    Hashable keys go through a dict. Keys that cannot be hashed are kept
    in a list and found by ==, so a row with a list column still takes
    part in deduplication and grouping.
    """

    def __init__(self) -> None:
        self._hashed: dict[Any, V] = {}
        self._unhashable: list[tuple[Any, V]] = []
        self._items: list[tuple[Any, V]] = []

    def setdefault(self, key: Any, default: V) -> V:
        """Return the value stored under key, storing default if absent."""
        try:
            found = self._hashed.get(key, _MISSING)
        except TypeError:
            for existing, value in self._unhashable:
                if existing == key:
                    return value
            self._unhashable.append((key, default))
        else:
            if found is not _MISSING:
                return found  # type: ignore[return-value]
            self._hashed[key] = default
        self._items.append((key, default))
        return default

    def __contains__(self, key: Any) -> bool:
        try:
            return key in self._hashed
        except TypeError:
            return any(existing == key for existing, _ in self._unhashable)

    def items(self) -> list[tuple[Any, V]]:
        """Return (key, value) pairs in first-insertion order."""
        return list(self._items)

    def values(self) -> list[V]:
        return [value for _, value in self._items]

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)


def _check_compatible(left: Table[Any], right: Table[Any]) -> None:
    if left.row_type is not right.row_type:
        raise SchemaMismatchError(left.header(), right.header())


def _keys(rows: Iterable[Row]) -> KeyIndex[None]:
    index: KeyIndex[None] = KeyIndex()
    for row in rows:
        index.setdefault(row_key(row), None)
    return index


def _distinct(rows: Iterable[T]) -> list[T]:
    """First occurrence of every structurally distinct row, in order."""
    seen: KeyIndex[T] = KeyIndex()
    for row in rows:
        seen.setdefault(row_key(row), row)
    return seen.values()


def _result(name: str, left: Table[T], right: Table[T] | None = None) -> Table[T]:
    strict = left.strict and (right is None or right.strict)
    return Table(name, left.row_type, strict=strict)


def distinct(table: Table[T]) -> Table[T]:
    """Remove duplicate rows, keeping first occurrences in order."""
    result = _result(f"{table.name}_distinct", table)
    result.insert_many(_distinct(table.rows()))
    return result


def union(left: Table[T], right: Table[T]) -> Table[T]:
    """Rows of left then right, deduplicated.

    Raises:
        SchemaMismatchError: If the row types differ.
    """
    _check_compatible(left, right)
    result = _result(f"{left.name}_union_{right.name}", left, right)
    result.insert_many(_distinct(left.rows() + right.rows()))
    return result


def intersect(left: Table[T], right: Table[T]) -> Table[T]:
    """Rows of left that also occur in right, deduplicated, in left order.

    Raises:
        SchemaMismatchError: If the row types differ.
    """
    _check_compatible(left, right)
    right_keys = _keys(right.rows())
    result = _result(f"{left.name}_intersect_{right.name}", left, right)
    result.insert_many(_distinct(r for r in left.rows() if row_key(r) in right_keys))
    return result


def except_(left: Table[T], right: Table[T]) -> Table[T]:
    """Rows of left that do not occur in right, deduplicated, in left order.

    Raises:
        SchemaMismatchError: If the row types differ.
    """
    _check_compatible(left, right)
    right_keys = _keys(right.rows())
    result = _result(f"{left.name}_except_{right.name}", left, right)
    result.insert_many(
        _distinct(r for r in left.rows() if row_key(r) not in right_keys)
    )
    return result


difference = except_
