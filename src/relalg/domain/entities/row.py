"""The Row capability.

Every record type stored in a Table must describe its own shape:

    - header(): class-level, fixed ordered column names
    - values(): the instance's column values in header order
    - to_display_row(): one display string per column in header order

Python has no compile-time check for this contract, so it is validated when
a Table is created for the type (see validate_row_type).

Example:
    >>> @dataclass(frozen=True)
    ... class Author(DataclassRow):
    ...     id: int
    ...     name: str
    >>> Author.header()
    ('id', 'name')
    >>> Author(1, "Orwell").to_display_row()
    ('1', 'Orwell')
"""

from __future__ import annotations

import dataclasses
from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

from relalg.domain.value_objects import (
    AmbiguousColumnError,
    ColumnNotFoundError,
    InvalidRowTypeError,
    is_null,
)

NULL_DISPLAY = "NULL"

ColumnRef = str | int
"""A column addressed by header name or by position."""


@runtime_checkable
class Row(Protocol):
    """Protocol every record type must satisfy to live in a Table."""

    @classmethod
    def header(cls) -> tuple[str, ...]:
        """Return the column names, in field order."""
        ...

    def values(self) -> tuple[Any, ...]:
        """Return the column values, in header order."""
        ...

    def to_display_row(self) -> tuple[str, ...]:
        """Return one display string per column, in header order."""
        ...


def display_value(value: Any) -> str:
    """Convert a column value to its display string."""
    if is_null(value):
        return NULL_DISPLAY
    return str(value)


@lru_cache(maxsize=None)
def _dataclass_header(cls: type) -> tuple[str, ...]:
    return tuple(f.metadata.get("column", f.name) for f in dataclasses.fields(cls))


class DataclassRow:
    """Row capability for dataclasses.

    The header is taken from the dataclass fields; a field can override its
    column title with ``field(metadata={"column": "Author ID"})``. Declare
    the dataclass frozen so rows behave as immutable values.
    """

    __slots__ = ()

    @classmethod
    def header(cls) -> tuple[str, ...]:
        return _dataclass_header(cls)

    def values(self) -> tuple[Any, ...]:
        return tuple(getattr(self, f.name) for f in dataclasses.fields(self))

    def to_display_row(self) -> tuple[str, ...]:
        return tuple(display_value(v) for v in self.values())


def validate_row_type(row_type: Any, table_name: str) -> tuple[str, ...]:
    """Check that row_type implements the Row capability.

    Args:
        row_type: The class rows of the table will be instances of.
        table_name: Table name used in error messages.

    Returns:
        The row type's header.

    Raises:
        InvalidRowTypeError: If the type is not a class, misses one of the
            Row methods, or reports a header that is not a sequence of strings.
    """
    if not isinstance(row_type, type):
        raise InvalidRowTypeError(table_name, f"{row_type!r} is not a class")

    for method in ("header", "values", "to_display_row"):
        if not callable(getattr(row_type, method, None)):
            raise InvalidRowTypeError(
                table_name, f"{row_type.__name__} does not define {method}()"
            )

    try:
        header = row_type.header()
    except TypeError as e:
        raise InvalidRowTypeError(table_name, str(e)) from e

    if isinstance(header, str) or not all(isinstance(c, str) for c in header):
        raise InvalidRowTypeError(
            table_name, f"{row_type.__name__}.header() must be a sequence of str"
        )
    return tuple(header)


def column_index(header: tuple[str, ...], column: ColumnRef) -> int:
    """Resolve a column name or position against a header.

    Raises:
        ColumnNotFoundError: Unknown name or out-of-range position.
        AmbiguousColumnError: The name occurs more than once in the header.
    """
    if isinstance(column, int) and not isinstance(column, bool):
        if 0 <= column < len(header):
            return column
        raise ColumnNotFoundError(column, header)

    matches = [i for i, name in enumerate(header) if name == column]
    if not matches:
        raise ColumnNotFoundError(column, header)
    if len(matches) > 1:
        raise AmbiguousColumnError(column, header)
    return matches[0]
