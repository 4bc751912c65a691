"""
Prometheus metrics collection.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from jobclues.constants import (
    METRIC_EVENTS_PUBLISHED,
    METRIC_PUBLISH_FAILURES,
    METRIC_TIME_IN_QUEUE,
    METRIC_TIME_TO_PERFORM,
)

# Global metrics instance
_metrics: "MetricsCollector | None" = None


class MetricsCollector:
    """
    Prometheus metrics collector for job lifecycle events.

    Collects metrics for:
    - Lifecycle events published
    - Time spent waiting in the queue
    - Job execution duration
    - Publisher failures
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional custom registry. Uses default if not provided.
        """
        self._registry = registry or REGISTRY

        self.events_published = Counter(
            METRIC_EVENTS_PUBLISHED,
            "Total number of job lifecycle events published",
            ["event_type", "queue"],
            registry=self._registry,
        )

        self.time_in_queue = Histogram(
            METRIC_TIME_IN_QUEUE,
            "Time jobs spent in the queue between enqueue and dequeue",
            ["queue", "job_class"],
            buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 15.0, 60.0, 300.0, 900.0),
            registry=self._registry,
        )

        self.time_to_perform = Histogram(
            METRIC_TIME_TO_PERFORM,
            "Job execution duration in seconds",
            ["queue", "job_class", "status"],
            buckets=(0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0),
            registry=self._registry,
        )

        self.publish_failures = Counter(
            METRIC_PUBLISH_FAILURES,
            "Total number of events a publisher failed to deliver",
            ["publisher"],
            registry=self._registry,
        )

    def record_event(self, event_type: str, queue: str) -> None:
        """Record a published lifecycle event."""
        self.events_published.labels(event_type=event_type, queue=queue).inc()

    def record_time_in_queue(self, queue: str, job_class: str, seconds: float) -> None:
        """Record how long a job waited in the queue."""
        self.time_in_queue.labels(queue=queue, job_class=job_class).observe(seconds)

    def record_time_to_perform(
        self,
        queue: str,
        job_class: str,
        status: str,
        seconds: float,
    ) -> None:
        """Record a job execution duration."""
        self.time_to_perform.labels(
            queue=queue,
            job_class=job_class,
            status=status,
        ).observe(seconds)

    def record_publish_failure(self, publisher: str) -> None:
        """Record an event a publisher failed to deliver."""
        self.publish_failures.labels(publisher=publisher).inc()

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self._registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics response."""
        return CONTENT_TYPE_LATEST


def setup_metrics() -> MetricsCollector:
    """
    Set up and return the metrics collector.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_metrics() -> MetricsCollector:
    """
    Get the metrics collector instance, creating it on first use.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    if _metrics is None:
        return setup_metrics()
    return _metrics
