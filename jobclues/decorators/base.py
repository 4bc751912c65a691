"""
Shared plumbing for the queue and job decorators.
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from jobclues.config import CluesConfig
from jobclues.constants import EventType, META_EVENT_HASH

logger = logging.getLogger(__name__)


class InstrumentationDecorator:
    """
    Holds the configuration and publishes events with failure isolation.

    A publisher that raises never affects the decorated operation: the error
    is logged, counted when the configuration carries a metrics collector,
    and processing continues as if the event had been delivered.
    """

    def __init__(self, config: CluesConfig | None = None):
        self._config = config if config is not None else CluesConfig.disabled()

    @property
    def config(self) -> CluesConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def _publish(
        self,
        event_type: EventType,
        timestamp: datetime,
        queue: str,
        metadata: dict[str, Any],
        job_class: str | None,
        job_args: Sequence[Any],
    ) -> None:
        publisher = self._config.event_publisher
        if publisher is None:
            return

        try:
            publisher.publish(event_type, timestamp, queue, metadata, job_class, *job_args)
        except Exception:
            logger.exception(
                "Failed to publish job lifecycle event",
                extra={
                    "event_type": str(event_type),
                    "queue": str(queue),
                    "job_class": job_class,
                    "event_hash": metadata.get(META_EVENT_HASH),
                    "publisher": publisher.name,
                },
            )
            if self._config.metrics is not None:
                self._config.metrics.record_publish_failure(publisher.name)
