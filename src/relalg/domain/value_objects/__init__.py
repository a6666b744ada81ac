"""Value objects shared by the domain layer.

Exports:
    NULL marker:
        - NULL: The absent-value singleton
        - NullType: Its type
        - is_null: True for NULL and None

    Errors:
        - RelAlgError: Base class
        - TableAlreadyExistsError: Name conflict in a Database
        - TableNotFoundError: Unknown table name
        - InvalidRowTypeError: Row type without the Row capability or mismatched
        - ColumnNotFoundError / AmbiguousColumnError: Column resolution
        - SchemaMismatchError: Set operation over different headers
"""

from relalg.domain.value_objects.errors import (
    AmbiguousColumnError,
    ColumnNotFoundError,
    InvalidRowTypeError,
    RelAlgError,
    SchemaMismatchError,
    TableAlreadyExistsError,
    TableNotFoundError,
)
from relalg.domain.value_objects.nulls import NULL, NullType, is_null

__all__ = [
    # NULL
    "NULL",
    "NullType",
    "is_null",
    # Errors
    "RelAlgError",
    "TableAlreadyExistsError",
    "TableNotFoundError",
    "InvalidRowTypeError",
    "ColumnNotFoundError",
    "AmbiguousColumnError",
    "SchemaMismatchError",
]
