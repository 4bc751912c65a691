"""
Publishers that write one line per event to a text stream.
"""

import sys
from datetime import datetime
from typing import Any, TextIO

from jobclues.constants import PUBLISHER_STDOUT, EventType
from jobclues.publishers.base import EventPublisher, register_publisher
from jobclues.types.events import LifecycleEvent


class StreamPublisher(EventPublisher):
    """
    Writes each event as a single JSON line to a stream.

    Every call writes and flushes immediately; nothing is buffered or batched.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream

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
        stream = self.stream
        stream.write(event.to_line() + "\n")
        stream.flush()


@register_publisher(PUBLISHER_STDOUT)
class StandardOutPublisher(StreamPublisher):
    """Writes events to standard output."""

    def __init__(self) -> None:
        super().__init__(sys.stdout)

    @property
    def stream(self) -> TextIO:
        # Resolved per call so redirected stdout (test capture, daemons) is honored
        return sys.stdout
