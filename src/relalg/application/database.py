"""Database - table registry and operator entry point.

The Database is a namespace: it maps unique names to tables and exposes
the relational operators as methods. It never inspects row contents.

Usage:
    from relalg import Database

    db = Database()
    books = db.create_table("books", Book)
    authors = db.create_table("authors", Author)
    books.insert_many([Book(1, "1984", 1), Book(2, "Mockingbird", 2)])
    authors.insert_many([Author(1, "Orwell"), Author(2, "Lee")])

    pairs = db.inner_join(books, authors, lambda b, a: b.author_id == a.id)

Operator results are new tables that are not registered; register one
explicitly with adopt_table() if it should be looked up by name later.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Mapping, Sequence, TypeVar

from relalg.domain.entities import (
    AggregatedRow,
    ColumnRef,
    JoinedRow,
    ProjectedRow,
    Row,
    Table,
)
from relalg.domain.services import (
    AggregateFunction,
    JoinPredicate,
    aggregation,
    joins,
    selection,
    set_operations,
)
from relalg.domain.services.aggregation import GroupKey
from relalg.domain.value_objects import (
    InvalidRowTypeError,
    TableAlreadyExistsError,
    TableNotFoundError,
)
from relalg.infrastructure.config import Config, get_config
from relalg.infrastructure.logging import get_logger, operator_context
from relalg.infrastructure.metrics import MetricsRegistry, get_metrics
from relalg.infrastructure.tracing import operator_span

T = TypeVar("T", bound=Row)
L = TypeVar("L", bound=Row)
R = TypeVar("R", bound=Row)


class Database:
    """Registry of named tables plus the relational operators.

    Table handles returned by create_table() are shared between the
    registry and the caller: rows the caller inserts are visible through
    get_table() and vice versa. A handle stays usable after the Database
    itself is gone.

    Thread Safety:
        Registration is serialized, so two concurrent create_table() calls
        for one name cannot both succeed. Operators only read snapshots of
        their input tables.
    """

    def __init__(
        self,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize an empty database.

        Args:
            config: Engine configuration. Uses the global config if None.
            metrics: Metrics registry. Uses the global registry if None and
                metrics are enabled in the config.
        """
        self._config = config or get_config()
        if metrics is None and self._config.observability.metrics_enabled:
            metrics = get_metrics()
        self._metrics = metrics
        self._tables: dict[str, Table[Any]] = {}
        self._lock = threading.Lock()
        self._logger = get_logger(__name__)

    @property
    def config(self) -> Config:
        """Return the configuration this database was created with."""
        return self._config

    # ========================================================================
    # Registry
    # ========================================================================

    def create_table(self, name: str, row_type: type[T]) -> Table[T]:
        """Create, register and return an empty table.

        Args:
            name: Unique table name.
            row_type: Class implementing the Row capability.

        Returns:
            The new table, shared with the registry.

        Raises:
            TableAlreadyExistsError: If name is already registered.
            InvalidRowTypeError: If row_type lacks the Row capability.
        """
        with self._lock:
            if name in self._tables:
                if self._metrics is not None:
                    self._metrics.table_conflicts_total.inc()
                self._logger.warning("table_create_conflict", table=name)
                raise TableAlreadyExistsError(name)

            table = Table(name, row_type, strict=self._config.engine.strict_row_types)
            self._tables[name] = table

        if self._metrics is not None:
            self._metrics.tables_created_total.inc()
        self._logger.info("table_created", table=name, row_type=row_type.__name__)
        return table

    def adopt_table(self, table: Table[T]) -> Table[T]:
        """Register an existing table, such as an operator result, under its name.

        Raises:
            TableAlreadyExistsError: If the table's name is already registered.
        """
        with self._lock:
            if table.name in self._tables:
                if self._metrics is not None:
                    self._metrics.table_conflicts_total.inc()
                raise TableAlreadyExistsError(table.name)
            self._tables[table.name] = table

        if self._metrics is not None:
            self._metrics.tables_created_total.inc()
        self._logger.info("table_adopted", table=table.name, rows=len(table))
        return table

    def get_table(self, name: str) -> Table[Any] | None:
        """Return the table registered under name, or None."""
        with self._lock:
            return self._tables.get(name)

    def require_table(self, name: str, row_type: type[T] | None = None) -> Table[T]:
        """Return the table registered under name, checking its row type.

        Raises:
            TableNotFoundError: If no table is registered under name.
            InvalidRowTypeError: If row_type is given and differs from the
                table's row type.
        """
        table = self.get_table(name)
        if table is None:
            raise TableNotFoundError(name)
        if row_type is not None and table.row_type is not row_type:
            raise InvalidRowTypeError(
                name,
                f"table holds {table.row_type.__name__}, not {row_type.__name__}",
            )
        return table

    def insert_into(self, name: str, *rows: Row) -> int:
        """Append rows to a registered table.

        Returns:
            The number of rows inserted.

        Raises:
            TableNotFoundError: If no table is registered under name.
        """
        table = self.require_table(name)
        table.insert_many(rows)
        if self._metrics is not None:
            self._metrics.rows_inserted_total.inc(len(rows))
        return len(rows)

    def has_table(self, name: str) -> bool:
        """Check if a table is registered under name."""
        with self._lock:
            return name in self._tables

    def table_names(self) -> list[str]:
        """Return the registered table names, sorted."""
        with self._lock:
            return sorted(self._tables)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_table(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)

    # ========================================================================
    # Joins
    # ========================================================================

    def cross_join(self, left: Table[L], right: Table[R]) -> Table[JoinedRow[L, R]]:
        """Cartesian product of left and right."""
        return self._run(
            "cross_join", {"left": left, "right": right}, lambda: joins.cross_join(left, right)
        )

    def inner_join(
        self, left: Table[L], right: Table[R], predicate: JoinPredicate
    ) -> Table[JoinedRow[L, R]]:
        """Pairs of left and right rows satisfying predicate."""
        return self._run(
            "inner_join",
            {"left": left, "right": right},
            lambda: joins.inner_join(left, right, predicate),
        )

    def left_outer_join(
        self, left: Table[L], right: Table[R], predicate: JoinPredicate
    ) -> Table[JoinedRow[L, R]]:
        """Inner join plus unmatched left rows padded with NULLs."""
        return self._run(
            "left_outer_join",
            {"left": left, "right": right},
            lambda: joins.left_outer_join(left, right, predicate),
        )

    def right_outer_join(
        self, left: Table[L], right: Table[R], predicate: JoinPredicate
    ) -> Table[JoinedRow[L, R]]:
        """Inner join plus unmatched right rows padded with NULLs."""
        return self._run(
            "right_outer_join",
            {"left": left, "right": right},
            lambda: joins.right_outer_join(left, right, predicate),
        )

    def full_outer_join(
        self, left: Table[L], right: Table[R], predicate: JoinPredicate
    ) -> Table[JoinedRow[L, R]]:
        """Inner join plus unmatched rows of both sides padded with NULLs."""
        return self._run(
            "full_outer_join",
            {"left": left, "right": right},
            lambda: joins.full_outer_join(left, right, predicate),
        )

    # ========================================================================
    # Selection and projection
    # ========================================================================

    def select(self, table: Table[T], predicate: Callable[[T], bool]) -> Table[T]:
        """Rows of table satisfying predicate."""
        return self._run(
            "select", {"input": table}, lambda: selection.select(table, predicate)
        )

    def project(
        self, table: Table[T], columns: Sequence[ColumnRef]
    ) -> Table[ProjectedRow]:
        """Rows of table narrowed to columns, in the given order."""
        return self._run(
            "project", {"input": table}, lambda: selection.project(table, columns)
        )

    # ========================================================================
    # Set operations
    # ========================================================================

    def union(self, left: Table[T], right: Table[T]) -> Table[T]:
        """Distinct rows of left then right."""
        return self._run(
            "union", {"left": left, "right": right}, lambda: set_operations.union(left, right)
        )

    def intersect(self, left: Table[T], right: Table[T]) -> Table[T]:
        """Distinct rows of left that also occur in right."""
        return self._run(
            "intersect",
            {"left": left, "right": right},
            lambda: set_operations.intersect(left, right),
        )

    def except_(self, left: Table[T], right: Table[T]) -> Table[T]:
        """Distinct rows of left that do not occur in right."""
        return self._run(
            "except",
            {"left": left, "right": right},
            lambda: set_operations.except_(left, right),
        )

    difference = except_

    def distinct(self, table: Table[T]) -> Table[T]:
        """Rows of table without duplicates."""
        return self._run(
            "distinct", {"input": table}, lambda: set_operations.distinct(table)
        )

    # ========================================================================
    # Aggregation
    # ========================================================================

    def group_by(
        self,
        table: Table[T],
        key: GroupKey,
        aggregates: Mapping[str, AggregateFunction],
        key_name: str | None = None,
    ) -> Table[AggregatedRow]:
        """One aggregated row per distinct key, in order of first appearance."""
        key_name = key_name or self._config.engine.default_group_key
        return self._run(
            "group_by",
            {"input": table},
            lambda: aggregation.group_by(table, key, aggregates, key_name=key_name),
        )

    def aggregate(
        self, table: Table[T], aggregates: Mapping[str, AggregateFunction]
    ) -> Table[AggregatedRow]:
        """Aggregate the whole table into one row."""
        return self._run(
            "aggregate", {"input": table}, lambda: aggregation.aggregate(table, aggregates)
        )

    # ========================================================================
    # Instrumentation
    # ========================================================================

    def _run(
        self,
        operator: str,
        inputs: Mapping[str, Table[Any]],
        compute: Callable[[], Table[Any]],
    ) -> Table[Any]:
        """Run an operator with tracing, metrics and logging around it."""
        rows_in = {role: len(table) for role, table in inputs.items()}
        start = time.perf_counter()

        with operator_context(operator), operator_span(operator, rows_in) as span:
            result = compute()
            rows_out = len(result)
            span.set_attribute("relalg.rows_out", rows_out)
            elapsed = time.perf_counter() - start

            self._logger.debug(
                "operator_executed",
                rows_in=rows_in,
                rows_out=rows_out,
                result=result.name,
                duration_ms=round(elapsed * 1000, 3),
            )

        if self._metrics is not None:
            self._metrics.operator_calls_total.labels(operator=operator).inc()
            self._metrics.operator_rows_out_total.labels(operator=operator).inc(rows_out)
            self._metrics.operator_latency_seconds.labels(operator=operator).observe(elapsed)
        return result

