"""Row types produced by operators.

Operators build their output rows from classes generated per input shape,
so the header stays a class-level property just like on user row types:

    - JoinedRow: a left row next to a right row (either may be absent)
    - ProjectedRow: a subset of columns, in declared order
    - AggregatedRow: group key column(s) followed by aggregate columns

Generated classes are cached, so joining the same two row types twice
yields rows of the same class and the results compare equal.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, ClassVar, Generic, Iterator, TypeVar

from relalg.domain.entities.row import ColumnRef, Row, column_index, display_value
from relalg.domain.value_objects import NULL

L = TypeVar("L", bound=Row)
R = TypeVar("R", bound=Row)


class _ImmutableRow:
    """Base for operator rows: frozen, compared by class and values."""

    __slots__ = ()

    def values(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def to_display_row(self) -> tuple[str, ...]:
        return tuple(display_value(v) for v in self.values())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.values() == other.values()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.values()))


class JoinedRow(_ImmutableRow, Generic[L, R]):
    """A left row and a right row presented as one row.

    For outer joins the unmatched side is None and all of its columns
    read as NULL. Use joined_row_type() to obtain the class for a pair of
    row types; the base class itself has no header.

    Attributes:
        left: The left input row, or None if padded.
        right: The right input row, or None if padded.
    """

    __slots__ = ("left", "right")

    left_type: ClassVar[type[Row]]
    right_type: ClassVar[type[Row]]

    def __init__(self, left: L | None, right: R | None) -> None:
        if left is None and right is None:
            raise ValueError("A joined row needs at least one side")
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    @classmethod
    def header(cls) -> tuple[str, ...]:
        if "left_type" not in cls.__dict__:
            raise TypeError("JoinedRow must be bound with joined_row_type()")
        return cls.left_type.header() + cls.right_type.header()

    def values(self) -> tuple[Any, ...]:
        return _side_values(self.left, type(self).left_type) + _side_values(
            self.right, type(self).right_type
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(left={self.left!r}, right={self.right!r})"


def _side_values(row: Row | None, row_type: type[Row]) -> tuple[Any, ...]:
    if row is None:
        return (NULL,) * len(row_type.header())
    return tuple(row.values())


@lru_cache(maxsize=None)
def joined_row_type(left_type: type[L], right_type: type[R]) -> type[JoinedRow[L, R]]:
    """Return the JoinedRow class for a (left, right) pair of row types."""
    name = f"JoinedRow[{left_type.__name__}, {right_type.__name__}]"
    return type(
        name,
        (JoinedRow,),
        {"__slots__": (), "left_type": left_type, "right_type": right_type},
    )


class DerivedRow(_ImmutableRow):
    """A row holding plain values under a generated header.

    Values can be read by column name or position, like the rows of a
    query result.
    """

    __slots__ = ("_values",)

    columns: ClassVar[tuple[str, ...]]

    def __init__(self, values: tuple[Any, ...] | list[Any]) -> None:
        values = tuple(values)
        if "columns" not in type(self).__dict__:
            raise TypeError(f"{type(self).__name__} must be bound to a header")
        if len(values) != len(self.columns):
            raise ValueError(
                f"{type(self).__name__} expects {len(self.columns)} values, got {len(values)}"
            )
        object.__setattr__(self, "_values", values)

    @classmethod
    def header(cls) -> tuple[str, ...]:
        if "columns" not in cls.__dict__:
            raise TypeError(f"{cls.__name__} must be bound to a header")
        return cls.columns

    def values(self) -> tuple[Any, ...]:
        return self._values

    def __getitem__(self, key: ColumnRef) -> Any:
        return self._values[column_index(self.columns, key)]

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of column key, or default.

        A name that is missing or occurs more than once in the header
        yields default; use a position to read duplicated columns.
        """
        if self.columns.count(key) != 1:
            return default
        return self[key]

    def as_dict(self) -> dict[str, Any]:
        """Return the row as a column -> value mapping."""
        return dict(zip(self.columns, self._values))

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c}={v!r}" for c, v in zip(self.columns, self._values))
        return f"{type(self).__name__}({pairs})"


class ProjectedRow(DerivedRow):
    """Output row of project()."""

    __slots__ = ()


class AggregatedRow(DerivedRow):
    """Output row of group_by() and aggregate()."""

    __slots__ = ()


@lru_cache(maxsize=None)
def derived_row_type(base: type[DerivedRow], columns: tuple[str, ...]) -> type[DerivedRow]:
    """Return a subclass of base bound to the given header."""
    return type(base.__name__, (base,), {"__slots__": (), "columns": tuple(columns)})
