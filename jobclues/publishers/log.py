"""
Publisher that emits events as structured log records.
"""

import logging
from datetime import datetime
from typing import Any

from jobclues.constants import PUBLISHER_LOG, EventType
from jobclues.observability.logging import get_logger
from jobclues.publishers.base import EventPublisher, register_publisher
from jobclues.types.events import LifecycleEvent


@register_publisher(PUBLISHER_LOG)
class LogPublisher(EventPublisher):
    """
    Emits one structlog record per lifecycle event.

    Output format and destination follow `setup_logging()`.
    """

    def __init__(self, logger_name: str = "jobclues.events", level: int = logging.INFO):
        self._logger = get_logger(logger_name)
        self._level = level

    def publish(
        self,
        event_type: EventType,
        timestamp: datetime,
        queue: str,
        metadata: dict[str, Any],
        job_class: str | None,
        *job_args: Any,
    ) -> None:
        event = LifecycleEvent.from_publish_args(
            event_type, timestamp, queue, metadata, job_class, *job_args
        )
        self._logger.log(
            self._level,
            f"job.{event.event_type}",
            event_type=str(event.event_type),
            event_timestamp=event.timestamp.isoformat(),
            queue=event.queue,
            job_class=event.job_class,
            job_args=event.job_args,
            metadata=event.metadata,
        )
