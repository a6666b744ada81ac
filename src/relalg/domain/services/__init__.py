"""Domain services: the relational operators.

Every operator reads one or two tables and returns a new, unregistered
table. Inputs are never modified.

Exports:
    Joins:
        - cross_join, inner_join
        - left_outer_join, right_outer_join, full_outer_join

    Selection:
        - select: Filter rows by predicate
        - project: Narrow rows to a column subset

    Set operations:
        - union, intersect, except_ (alias difference), distinct

    Aggregation:
        - group_by, aggregate
        - count, count_of, sum_of, min_of, max_of, avg_of
"""

from relalg.domain.services.aggregation import (
    AggregateFunction,
    aggregate,
    avg_of,
    count,
    count_of,
    group_by,
    max_of,
    min_of,
    sum_of,
)
from relalg.domain.services.joins import (
    JoinPredicate,
    cross_join,
    full_outer_join,
    inner_join,
    left_outer_join,
    right_outer_join,
)
from relalg.domain.services.selection import project, select
from relalg.domain.services.set_operations import (
    KeyIndex,
    difference,
    distinct,
    except_,
    intersect,
    row_key,
    union,
)

__all__ = [
    # Joins
    "JoinPredicate",
    "cross_join",
    "inner_join",
    "left_outer_join",
    "right_outer_join",
    "full_outer_join",
    # Selection
    "select",
    "project",
    # Set operations
    "union",
    "intersect",
    "except_",
    "difference",
    "distinct",
    "row_key",
    "KeyIndex",
    # Aggregation
    "AggregateFunction",
    "group_by",
    "aggregate",
    "count",
    "count_of",
    "sum_of",
    "min_of",
    "max_of",
    "avg_of",
]
