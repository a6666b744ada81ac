"""Grouping and aggregation (gamma).

An aggregate function maps the rows of one group to a single value. The
helpers below cover the SQL set (count, sum, min, max, avg); any callable
taking a sequence of rows works as well:

    >>> group_by(books, "author_id", {"books": count(), "pages": sum_of("pages")})

Like SQL, min/max/avg ignore NULL (and None) values and return NULL when
nothing is left; sum of nothing is 0.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence, TypeVar

from relalg.domain.entities import (
    AggregatedRow,
    ColumnRef,
    Row,
    Table,
    column_index,
    derived_row_type,
)
from relalg.domain.services.set_operations import KeyIndex
from relalg.domain.value_objects import NULL, is_null

T = TypeVar("T", bound=Row)

AggregateFunction = Callable[[Sequence[Any]], Any]
ValueSource = ColumnRef | Callable[[Any], Any]
GroupKey = ColumnRef | Sequence[ColumnRef] | Callable[[Any], Any]

DEFAULT_KEY_NAME = "key"


def _extractor(source: ValueSource) -> Callable[[Row], Any]:
    """Build a row -> value function from a column reference or callable."""
    if callable(source):
        return source

    def extract(row: Row) -> Any:
        return row.values()[column_index(type(row).header(), source)]

    return extract


def _present(rows: Sequence[Row], source: ValueSource) -> list[Any]:
    extract = _extractor(source)
    return [v for v in map(extract, rows) if not is_null(v)]


def count() -> AggregateFunction:
    """Number of rows in the group."""
    return len


def count_of(source: ValueSource) -> AggregateFunction:
    """Number of non-NULL values of a column in the group."""
    return lambda rows: len(_present(rows, source))


def sum_of(source: ValueSource) -> AggregateFunction:
    """Sum of the non-NULL values of a column."""
    return lambda rows: sum(_present(rows, source))


def min_of(source: ValueSource) -> AggregateFunction:
    """Smallest non-NULL value of a column, or NULL."""
    return lambda rows: min(_present(rows, source), default=NULL)


def max_of(source: ValueSource) -> AggregateFunction:
    """Largest non-NULL value of a column, or NULL."""
    return lambda rows: max(_present(rows, source), default=NULL)


def avg_of(source: ValueSource) -> AggregateFunction:
    """Arithmetic mean of the non-NULL values of a column, or NULL."""

    def average(rows: Sequence[Row]) -> Any:
        values = _present(rows, source)
        if not values:
            return NULL
        return sum(values) / len(values)

    return average


def _key_columns(
    table: Table[Any], key: GroupKey, key_name: str
) -> tuple[tuple[str, ...], Callable[[Row], tuple[Any, ...]]]:
    """Return the key column names and a row -> key tuple function."""
    if callable(key):
        return (key_name,), lambda row: (key(row),)

    refs = [key] if isinstance(key, (str, int)) else list(key)
    header = table.header()
    indexes = [column_index(header, ref) for ref in refs]
    names = tuple(header[i] for i in indexes)

    def key_of(row: Row) -> tuple[Any, ...]:
        values = row.values()
        return tuple(values[i] for i in indexes)

    return names, key_of


def group_by(
    table: Table[T],
    key: GroupKey,
    aggregates: Mapping[str, AggregateFunction],
    key_name: str = DEFAULT_KEY_NAME,
) -> Table[AggregatedRow]:
    """Partition rows by key and aggregate every partition.

    Args:
        table: Input table.
        key: Column name/position, a sequence of them, or a row -> key callable.
        aggregates: Output column name -> aggregate function, in output order.
        key_name: Column name of the key when key is a callable.

    Returns:
        One AggregatedRow per distinct key, in order of first appearance,
        holding the key column(s) followed by one column per aggregate.

    Raises:
        ColumnNotFoundError: A key or aggregate column is not in the header.
    """
    key_names, key_of = _key_columns(table, key, key_name)
    row_type = derived_row_type(AggregatedRow, key_names + tuple(aggregates))

    groups: KeyIndex[list[T]] = KeyIndex()
    for row in table.rows():
        groups.setdefault(key_of(row), []).append(row)

    result: Table[AggregatedRow] = Table(f"{table.name}_group_by", row_type)
    result.insert_many(
        row_type(group_key + tuple(fn(rows) for fn in aggregates.values()))
        for group_key, rows in groups.items()
    )
    return result


def aggregate(
    table: Table[T], aggregates: Mapping[str, AggregateFunction]
) -> Table[AggregatedRow]:
    """Aggregate the whole table into exactly one row.

    Unlike group_by, an empty input still yields a row (count 0, sum 0,
    NULL for min/max/avg).
    """
    row_type = derived_row_type(AggregatedRow, tuple(aggregates))
    rows = table.rows()
    result: Table[AggregatedRow] = Table(f"{table.name}_aggregate", row_type)
    result.insert(row_type(tuple(fn(rows) for fn in aggregates.values())))
    return result
