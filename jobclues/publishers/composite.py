"""
Publisher that fans each event out to several publishers.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from jobclues.constants import EventType
from jobclues.publishers.base import EventPublisher

logger = logging.getLogger(__name__)


class CompositePublisher(EventPublisher):
    """
    Delivers every event to each child publisher in order.

    A child that raises is logged and skipped; the remaining children still
    receive the event.
    """

    def __init__(self, publishers: Iterable[EventPublisher] = ()):
        self._publishers: list[EventPublisher] = list(publishers)

    @property
    def publishers(self) -> list[EventPublisher]:
        return list(self._publishers)

    def add(self, publisher: EventPublisher) -> None:
        """Append a child publisher."""
        self._publishers.append(publisher)

    def remove(self, publisher: EventPublisher) -> None:
        """Remove a child publisher."""
        self._publishers.remove(publisher)

    def publish(
        self,
        event_type: EventType,
        timestamp: datetime,
        queue: str,
        metadata: dict[str, Any],
        job_class: str | None,
        *job_args: Any,
    ) -> None:
        for publisher in self._publishers:
            try:
                publisher.publish(event_type, timestamp, queue, metadata, job_class, *job_args)
            except Exception:
                logger.exception(
                    "Publisher failed to deliver event",
                    extra={"publisher": publisher.name, "event_type": str(event_type)},
                )
