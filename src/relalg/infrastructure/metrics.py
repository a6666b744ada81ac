"""Prometheus metrics for the relational algebra engine."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all engine metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Operator metrics
        self.operator_calls_total = Counter(
            "relalg_operator_calls_total",
            "Total number of operator invocations",
            ["operator"],  # cross_join, select, union, ...
            registry=self._registry,
        )

        self.operator_rows_out_total = Counter(
            "relalg_operator_rows_out_total",
            "Total number of rows produced by operators",
            ["operator"],
            registry=self._registry,
        )

        self.operator_latency_seconds = Histogram(
            "relalg_operator_latency_seconds",
            "Operator latency in seconds",
            ["operator"],
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        # Registry metrics
        self.tables_created_total = Counter(
            "relalg_tables_created_total",
            "Total tables registered by create_table or adopt_table, across all databases",
            registry=self._registry,
        )

        self.table_conflicts_total = Counter(
            "relalg_table_conflicts_total",
            "Total create_table calls rejected for a duplicate name",
            registry=self._registry,
        )

        self.rows_inserted_total = Counter(
            "relalg_rows_inserted_total",
            "Total rows inserted through Database.insert_into",
            registry=self._registry,
        )

        # Engine info
        self.info = Info(
            "relalg",
            "Relational algebra engine information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Return the collector registry the metrics are registered on."""
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry; the global registry is reused
            when omitted

    Returns:
        The metrics registry
    """
    global _metrics
    from relalg import __version__

    if registry is None:
        metrics = get_metrics()
    else:
        metrics = MetricsRegistry(registry)
        _metrics = metrics

    metrics.info.info({"version": __version__})

    # Start HTTP server for Prometheus scraping
    start_http_server(port, registry=metrics.registry)

    return metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
