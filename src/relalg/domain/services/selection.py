"""Selection (sigma) and projection (pi) over a single table."""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from relalg.domain.entities import (
    ColumnRef,
    ProjectedRow,
    Row,
    Table,
    column_index,
    derived_row_type,
)

T = TypeVar("T", bound=Row)


def select(table: Table[T], predicate: Callable[[T], bool]) -> Table[T]:
    """Keep the rows for which predicate holds, in their original order."""
    result: Table[T] = Table(
        f"{table.name}_select", table.row_type, strict=table.strict
    )
    result.insert_many(row for row in table.rows() if predicate(row))
    return result


def project(table: Table[T], columns: Sequence[ColumnRef]) -> Table[ProjectedRow]:
    """Narrow every row to the given columns.

    Columns are addressed by header name or position, and the output
    header follows the order in which they are given here, not the
    source order. Duplicate names in the source header must be selected
    by position.

    Raises:
        ColumnNotFoundError: A column is not in the table's header.
        AmbiguousColumnError: A name occurs more than once in the header.
    """
    if isinstance(columns, (str, int)):
        columns = [columns]
    source_header = table.header()
    indexes = [column_index(source_header, c) for c in columns]
    row_type = derived_row_type(ProjectedRow, tuple(source_header[i] for i in indexes))

    result: Table[ProjectedRow] = Table(f"{table.name}_project", row_type)
    projected = []
    for row in table.rows():
        values = row.values()
        projected.append(row_type(tuple(values[i] for i in indexes)))
    result.insert_many(projected)
    return result
