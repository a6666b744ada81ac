"""Relational Algebra Engine - typed in-memory tables and their operators

A teaching-sized engine showing the primitive operators underneath SQL
execution: selection, projection, the join family, set operations and
aggregation over typed, in-memory tables.
"""

__version__ = "0.1.0"

from relalg.application import Database
from relalg.domain.entities import (
    AggregatedRow,
    DataclassRow,
    JoinedRow,
    ProjectedRow,
    Row,
    Table,
)
from relalg.domain.services import (
    aggregate,
    avg_of,
    count,
    count_of,
    cross_join,
    difference,
    distinct,
    except_,
    full_outer_join,
    group_by,
    inner_join,
    intersect,
    left_outer_join,
    max_of,
    min_of,
    project,
    right_outer_join,
    select,
    sum_of,
    union,
)
from relalg.domain.value_objects import (
    NULL,
    AmbiguousColumnError,
    ColumnNotFoundError,
    InvalidRowTypeError,
    RelAlgError,
    SchemaMismatchError,
    TableAlreadyExistsError,
    TableNotFoundError,
)
from relalg.infrastructure import configure_observability

__all__ = [
    "Database",
    "Table",
    "Row",
    "DataclassRow",
    "JoinedRow",
    "ProjectedRow",
    "AggregatedRow",
    "NULL",
    # Operators
    "cross_join",
    "inner_join",
    "left_outer_join",
    "right_outer_join",
    "full_outer_join",
    "select",
    "project",
    "union",
    "intersect",
    "except_",
    "difference",
    "distinct",
    "group_by",
    "aggregate",
    "count",
    "count_of",
    "sum_of",
    "min_of",
    "max_of",
    "avg_of",
    # Errors
    "RelAlgError",
    "TableAlreadyExistsError",
    "TableNotFoundError",
    "InvalidRowTypeError",
    "ColumnNotFoundError",
    "AmbiguousColumnError",
    "SchemaMismatchError",
    # Setup
    "configure_observability",
]
