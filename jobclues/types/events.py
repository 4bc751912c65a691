"""
Lifecycle event type definitions.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from jobclues.constants import EventType, META_EVENT_HASH


class LifecycleEvent(BaseModel):
    """
    Event emitted at a job lifecycle transition.

    Ephemeral: built from the publish arguments and handed to a sink,
    never stored by the instrumentation layer.
    """

    event_type: EventType
    timestamp: datetime
    queue: str
    job_class: str | None = None
    job_args: list[Any] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_publish_args(
        cls,
        event_type: EventType | str,
        timestamp: datetime,
        queue: Any,
        metadata: dict[str, Any] | None,
        job_class: str | None,
        *job_args: Any,
    ) -> "LifecycleEvent":
        """Create an event from the arguments of `EventPublisher.publish`."""
        return cls(
            event_type=EventType(event_type),
            timestamp=timestamp,
            queue=str(queue),
            job_class=job_class,
            job_args=list(job_args),
            metadata=dict(metadata or {}),
        )

    @property
    def event_hash(self) -> str | None:
        """Correlation id of the job this event belongs to."""
        return self.metadata.get(META_EVENT_HASH)

    def to_line(self) -> str:
        """
        Render the event as a single JSON line without a trailing newline.

        Job arguments that are not JSON-serializable are rendered with repr().
        """
        return self.model_dump_json(fallback=repr)


def utc_now() -> datetime:
    """Timezone-aware UTC now for event timestamps."""
    return datetime.now(UTC)
