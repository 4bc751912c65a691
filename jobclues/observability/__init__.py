"""
Observability module.
Contains logging, metrics, and tracing setup.
"""

from jobclues.observability.logging import (
    bound_context,
    build_formatter,
    get_logger,
    setup_logging,
)
from jobclues.observability.metrics import (
    MetricsCollector,
    get_metrics,
    setup_metrics,
)
from jobclues.observability.tracing import get_tracer, setup_tracing

__all__ = [
    "setup_logging",
    "get_logger",
    "build_formatter",
    "bound_context",
    "setup_metrics",
    "get_metrics",
    "MetricsCollector",
    "setup_tracing",
    "get_tracer",
]
