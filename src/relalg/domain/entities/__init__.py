"""Domain entities for the relational algebra engine.

Exports:
    Row capability:
        - Row: Protocol every record type implements
        - DataclassRow: Row capability derived from dataclass fields
        - validate_row_type: Runtime check of the capability
        - column_index: Resolve a column name or position
        - display_value: Value -> display string

    Table:
        - Table: Ordered, named collection of rows of one type

    Operator rows:
        - JoinedRow / joined_row_type: Left row next to right row
        - DerivedRow / derived_row_type: Values under a generated header
        - ProjectedRow: Output of project()
        - AggregatedRow: Output of group_by() and aggregate()
"""

from relalg.domain.entities.derived_rows import (
    AggregatedRow,
    DerivedRow,
    JoinedRow,
    ProjectedRow,
    derived_row_type,
    joined_row_type,
)
from relalg.domain.entities.row import (
    ColumnRef,
    DataclassRow,
    Row,
    column_index,
    display_value,
    validate_row_type,
)
from relalg.domain.entities.table import Table

__all__ = [
    # Row capability
    "Row",
    "DataclassRow",
    "ColumnRef",
    "validate_row_type",
    "column_index",
    "display_value",
    # Table
    "Table",
    # Operator rows
    "JoinedRow",
    "joined_row_type",
    "DerivedRow",
    "derived_row_type",
    "ProjectedRow",
    "AggregatedRow",
]
