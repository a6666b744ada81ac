"""Join operators.

All joins traverse their inputs as nested loops in insertion order, with
the outer loop on the preserved side:

    - cross_join / inner_join / left_outer_join / full_outer_join: left is
      the outer loop, right varies fastest
    - right_outer_join: right is the outer loop, left varies fastest

Output rows are JoinedRow instances whose header is always
left.header() + right.header(), whichever side drives the loop.
Inputs are read from snapshots and never modified.

References:
    - Garcia-Molina, Ullman, Widom, "Database Systems" ch. 15 (nested-loop joins)
"""

from __future__ import annotations

from typing import Callable, TypeVar

from relalg.domain.entities import JoinedRow, Row, Table, joined_row_type

L = TypeVar("L", bound=Row)
R = TypeVar("R", bound=Row)

JoinPredicate = Callable[[L, R], bool]


def _result_table(
    left: Table[L], right: Table[R], kind: str
) -> tuple[Table[JoinedRow[L, R]], type[JoinedRow[L, R]]]:
    row_type = joined_row_type(left.row_type, right.row_type)
    return Table(f"{left.name}_{kind}_{right.name}", row_type), row_type


def cross_join(left: Table[L], right: Table[R]) -> Table[JoinedRow[L, R]]:
    """Pair every left row with every right row.

    Output order is (left index, right index), right varying fastest, and
    the output holds len(left) * len(right) rows.
    """
    result, row_type = _result_table(left, right, "cross")
    right_rows = right.rows()
    result.insert_many(row_type(l, r) for l in left.rows() for r in right_rows)
    return result


def inner_join(
    left: Table[L], right: Table[R], predicate: JoinPredicate
) -> Table[JoinedRow[L, R]]:
    """Pair left and right rows for which predicate(left, right) holds."""
    result, row_type = _result_table(left, right, "inner")
    right_rows = right.rows()
    result.insert_many(
        row_type(l, r) for l in left.rows() for r in right_rows if predicate(l, r)
    )
    return result


def left_outer_join(
    left: Table[L], right: Table[R], predicate: JoinPredicate
) -> Table[JoinedRow[L, R]]:
    """Inner join plus every unmatched left row padded with NULLs."""
    result, row_type = _result_table(left, right, "left_join")
    joined, _ = _left_driven(left.rows(), right.rows(), predicate, row_type)
    result.insert_many(joined)
    return result


def right_outer_join(
    left: Table[L], right: Table[R], predicate: JoinPredicate
) -> Table[JoinedRow[L, R]]:
    """Inner join plus every unmatched right row padded with NULLs.

    Output follows right order; for each right row its matching left rows
    appear in left order.
    """
    result, row_type = _result_table(left, right, "right_join")
    left_rows = left.rows()
    joined: list[JoinedRow[L, R]] = []
    for r in right.rows():
        matched = False
        for l in left_rows:
            if predicate(l, r):
                joined.append(row_type(l, r))
                matched = True
        if not matched:
            joined.append(row_type(None, r))
    result.insert_many(joined)
    return result


def full_outer_join(
    left: Table[L], right: Table[R], predicate: JoinPredicate
) -> Table[JoinedRow[L, R]]:
    """Left outer join followed by the right rows no left row matched.

    Matched pairs appear once. Unmatched right rows follow in right order.
    """
    result, row_type = _result_table(left, right, "full_join")
    right_rows = right.rows()
    joined, matched_right = _left_driven(left.rows(), right_rows, predicate, row_type)
    joined.extend(
        row_type(None, r) for i, r in enumerate(right_rows) if i not in matched_right
    )
    result.insert_many(joined)
    return result


def _left_driven(
    left_rows: tuple[L, ...],
    right_rows: tuple[R, ...],
    predicate: JoinPredicate,
    row_type: type[JoinedRow[L, R]],
) -> tuple[list[JoinedRow[L, R]], set[int]]:
    """Run the left outer pass, also reporting which right rows matched."""
    joined: list[JoinedRow[L, R]] = []
    matched_right: set[int] = set()
    for l in left_rows:
        matched = False
        for i, r in enumerate(right_rows):
            if predicate(l, r):
                joined.append(row_type(l, r))
                matched_right.add(i)
                matched = True
        if not matched:
            joined.append(row_type(l, None))
    return joined, matched_right
