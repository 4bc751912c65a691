"""
Publisher that feeds lifecycle events into Prometheus metrics.
"""

from datetime import datetime
from typing import Any

from jobclues.constants import (
    META_TIME_IN_QUEUE,
    META_TIME_TO_PERFORM,
    PUBLISHER_METRICS,
    EventType,
)
from jobclues.observability.metrics import MetricsCollector, get_metrics
from jobclues.publishers.base import EventPublisher, register_publisher


@register_publisher(PUBLISHER_METRICS)
class MetricsPublisher(EventPublisher):
    """
    Counts events and observes queue wait and execution durations.

    Durations are read from the metadata fields the decorators fill in:
    `time_in_queue` on dequeue, `time_to_perform` on finish or failure.
    """

    def __init__(self, collector: MetricsCollector | None = None):
        self._collector = collector or get_metrics()

    @property
    def collector(self) -> MetricsCollector:
        return self._collector

    def publish(
        self,
        event_type: EventType,
        timestamp: datetime,
        queue: str,
        metadata: dict[str, Any],
        job_class: str | None,
        *job_args: Any,
    ) -> None:
        queue = str(queue)
        job_class = job_class or "unknown"

        self._collector.record_event(str(event_type), queue)

        if event_type == EventType.DEQUEUED:
            seconds = metadata.get(META_TIME_IN_QUEUE)
            if seconds is not None:
                self._collector.record_time_in_queue(queue, job_class, seconds)

        elif event_type in (EventType.PERFORM_FINISHED, EventType.FAILED):
            seconds = metadata.get(META_TIME_TO_PERFORM)
            if seconds is not None:
                status = "finished" if event_type == EventType.PERFORM_FINISHED else "failed"
                self._collector.record_time_to_perform(queue, job_class, status, seconds)
