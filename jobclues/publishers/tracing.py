"""
Publisher that attaches lifecycle events to the current OpenTelemetry span.
"""

from datetime import datetime
from typing import Any

from opentelemetry import trace

from jobclues.constants import (
    META_ENQUEUED_TIME,
    META_EVENT_HASH,
    META_EXCEPTION_CLASS,
    META_EXCEPTION_MESSAGE,
    META_TIME_IN_QUEUE,
    META_TIME_TO_PERFORM,
    PUBLISHER_TRACING,
    SPAN_ATTRIBUTE_PREFIX,
    EventType,
)
from jobclues.publishers.base import EventPublisher, register_publisher

# Metadata fields copied onto span events when present
_SPAN_FIELDS = (
    META_EVENT_HASH,
    META_ENQUEUED_TIME,
    META_TIME_IN_QUEUE,
    META_TIME_TO_PERFORM,
    META_EXCEPTION_CLASS,
    META_EXCEPTION_MESSAGE,
)


@register_publisher(PUBLISHER_TRACING)
class TracingPublisher(EventPublisher):
    """
    Adds a span event named after the lifecycle event to the current span.

    Does nothing when no span is recording, so it is safe to enable in
    processes where the host does not trace job execution.
    """

    def publish(
        self,
        event_type: EventType,
        timestamp: datetime,
        queue: str,
        metadata: dict[str, Any],
        job_class: str | None,
        *job_args: Any,
    ) -> None:
        span = trace.get_current_span()
        if not span.is_recording():
            return

        attributes: dict[str, Any] = {
            f"{SPAN_ATTRIBUTE_PREFIX}.queue": str(queue),
            f"{SPAN_ATTRIBUTE_PREFIX}.class": job_class or "",
        }
        for key in _SPAN_FIELDS:
            value = metadata.get(key)
            if value is not None:
                attributes[f"{SPAN_ATTRIBUTE_PREFIX}.{key}"] = value

        span.add_event(
            f"job.{event_type}",
            attributes=attributes,
            timestamp=int(timestamp.timestamp() * 1_000_000_000),
        )
