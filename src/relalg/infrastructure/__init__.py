"""Infrastructure layer - cross-cutting concerns."""

from relalg.infrastructure.config import Config, get_config
from relalg.infrastructure.logging import (
    get_logger,
    operator_context,
    setup_logging,
    setup_logging_from_config,
)
from relalg.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from relalg.infrastructure.observability import configure_observability
from relalg.infrastructure.tracing import get_tracer, operator_span, setup_tracing

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "operator_context",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "operator_span",
    "configure_observability",
]
