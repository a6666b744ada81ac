"""Error taxonomy for the relational algebra engine.

Only registry conflicts are expected in normal use; everything else points
at a caller bug (wrong row type, unknown column, mismatched set operands).
Empty inputs and joins without matches are never errors.
"""

from __future__ import annotations


class RelAlgError(Exception):
    """Base class for all engine errors."""


class TableAlreadyExistsError(RelAlgError):
    """A table with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Table '{name}' already exists")


class TableNotFoundError(RelAlgError, KeyError):
    """No table is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Table '{name}' not found")

    def __str__(self) -> str:
        return self.args[0]


class InvalidRowTypeError(RelAlgError, TypeError):
    """A row type lacks the Row capability or does not match a table."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        self.name = name
        self.reason = reason
        message = f"Invalid row type for table '{name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ColumnNotFoundError(RelAlgError, KeyError):
    """A column name does not occur in a row header."""

    def __init__(self, column: str | int, header: tuple[str, ...]) -> None:
        self.column = column
        self.header = header
        super().__init__(f"Column {column!r} not found in {list(header)}")

    def __str__(self) -> str:
        return self.args[0]


class AmbiguousColumnError(RelAlgError, ValueError):
    """A column name occurs more than once in a row header."""

    def __init__(self, column: str, header: tuple[str, ...]) -> None:
        self.column = column
        self.header = header
        super().__init__(
            f"Column '{column}' is ambiguous in {list(header)}; select it by position"
        )


class SchemaMismatchError(RelAlgError, ValueError):
    """Set operation operands do not share a header."""

    def __init__(self, left: tuple[str, ...], right: tuple[str, ...]) -> None:
        self.left = left
        self.right = right
        super().__init__(f"Incompatible headers: {list(left)} vs {list(right)}")
