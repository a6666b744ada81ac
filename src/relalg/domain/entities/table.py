"""Table entity: an ordered, named collection of rows of one row type."""

from __future__ import annotations

import threading
from typing import Generic, Iterable, Iterator, TypeVar

from relalg.domain.entities.row import Row, validate_row_type
from relalg.domain.value_objects import InvalidRowTypeError

T = TypeVar("T", bound=Row)


class Table(Generic[T]):
    """A named, append-only sequence of rows sharing one row type.

    The schema is the row type's header and is fixed at creation. Insertion
    order is preserved and every operator iterates rows in that order.

    Thread Safety:
        Appends and snapshots are serialized by an internal lock, so
        rows() never observes half of an insert_many() batch. Operators
        work on such snapshots and never mutate their input tables.

    Example:
        >>> books = Table("books", Book)
        >>> books.insert(Book(1, "1984", 1))
        >>> len(books)
        1
    """

    def __init__(self, name: str, row_type: type[T], strict: bool = True) -> None:
        """Create an empty table.

        Args:
            name: Table name, immutable after creation.
            row_type: Class implementing the Row capability.
            strict: Reject inserted rows that are not row_type instances.

        Raises:
            InvalidRowTypeError: If row_type lacks the Row capability.
        """
        self._header = validate_row_type(row_type, name)
        self._name = name
        self._row_type = row_type
        self._strict = strict
        self._rows: list[T] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        """Return the table name."""
        return self._name

    @property
    def row_type(self) -> type[T]:
        """Return the row type of this table."""
        return self._row_type

    @property
    def strict(self) -> bool:
        """Return whether inserts must be instances of the row type."""
        return self._strict

    def header(self) -> tuple[str, ...]:
        """Return the column names of the table's schema."""
        return self._header

    def insert(self, row: T) -> None:
        """Append a single row."""
        self._check_row(row)
        with self._lock:
            self._rows.append(row)

    def insert_many(self, rows: Iterable[T]) -> None:
        """Append rows in argument order, as a single batch."""
        batch = list(rows)
        for row in batch:
            self._check_row(row)
        with self._lock:
            self._rows.extend(batch)

    def rows(self) -> tuple[T, ...]:
        """Return a snapshot of the current rows in insertion order."""
        with self._lock:
            return tuple(self._rows)

    def to_display_rows(self) -> tuple[tuple[str, ...], list[tuple[str, ...]]]:
        """Return the header and the display strings of every row.

        This is the full surface a table renderer needs.
        """
        return self._header, [row.to_display_row() for row in self.rows()]

    def _check_row(self, row: object) -> None:
        if self._strict and not isinstance(row, self._row_type):
            raise InvalidRowTypeError(
                self._name,
                f"expected {self._row_type.__name__}, got {type(row).__name__}",
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def __iter__(self) -> Iterator[T]:
        return iter(self.rows())

    def __repr__(self) -> str:
        return f"Table(name={self._name!r}, row_type={self._row_type.__name__}, rows={len(self)})"
