"""
Logging for the instrumentation layer.

The decorators run inside a host worker that owns the process-wide logging
setup. `setup_logging` therefore only attaches a handler to the `jobclues`
logger namespace and leaves root handlers alone; structlog is configured
only when the host has not configured it already.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog
from opentelemetry import trace

from jobclues.config import Settings, get_settings

LOGGER_NAMESPACE = "jobclues"

# Handler installed by setup_logging, replaced on reconfiguration
_handler: logging.Handler | None = None


def add_trace_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add the current OpenTelemetry trace and span ids to a log record."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        add_trace_context,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]


def build_formatter(log_format: str) -> structlog.stdlib.ProcessorFormatter:
    """
    Build a formatter rendering records from both stdlib and structlog loggers.

    Args:
        log_format: "json" for one JSON object per line, anything else for
            coloured console output.
    """
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def setup_logging(
    settings: Settings | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Route the package's own log records to a structured stream handler.

    Calling it again replaces the handler it installed earlier. Records
    also propagate to the host's root handlers when `log_propagate` is set.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        stream: Output stream. Defaults to standard output.

    Returns:
        The configured `jobclues` logger.
    """
    global _handler

    settings = settings or get_settings()

    if not structlog.is_configured():
        structlog.configure(
            processors=[
                *_shared_processors(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stdout)
    _handler.setFormatter(build_formatter(settings.log_format))
    package_logger.addHandler(_handler)
    package_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    package_logger.propagate = settings.log_propagate

    return package_logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger; `name` should sit under the `jobclues` namespace."""
    return structlog.get_logger(name)


@contextmanager
def bound_context(**kwargs: Any) -> Iterator[None]:
    """
    Bind context variables to every log record emitted inside the block.

    Host log lines written while a job runs pick up the binding too; it is
    removed on exit, including when the block raises.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
