"""One-call setup of logging, metrics and tracing from the config."""

from __future__ import annotations

from relalg.infrastructure.config import Config, get_config
from relalg.infrastructure.logging import get_logger, setup_logging_from_config
from relalg.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from relalg.infrastructure.tracing import setup_tracing


def configure_observability(
    config: Config | None = None,
    serve_metrics: bool = False,
) -> MetricsRegistry | None:
    """
    Configure the ambient stack from the observability section of the config.

    Logging is always configured. Tracing is exported over OTLP only when
    otel_endpoint is set. Metrics are created when metrics_enabled is true,
    and exposed on metrics_port when serve_metrics is true.

    Args:
        config: Configuration to apply. Uses the global config if None.
        serve_metrics: Start the Prometheus scrape endpoint.

    Returns:
        The metrics registry Databases should report to, or None when
        metrics are disabled.
    """
    obs = (config or get_config()).observability
    setup_logging_from_config(obs)

    if obs.otel_endpoint:
        setup_tracing(service_name=obs.otel_service_name, otlp_endpoint=obs.otel_endpoint)

    metrics: MetricsRegistry | None = None
    if obs.metrics_enabled:
        metrics = setup_metrics(obs.metrics_port) if serve_metrics else get_metrics()

    get_logger(__name__).info(
        "observability_configured",
        log_level=obs.log_level,
        metrics=metrics is not None,
        metrics_port=obs.metrics_port if serve_metrics and metrics is not None else None,
        tracing=obs.otel_endpoint,
    )
    return metrics
