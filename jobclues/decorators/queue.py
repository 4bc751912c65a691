"""
Queue decorator.

Wraps a host queue's push and pop so that every job entering the queue gets
a correlation id and an enqueue timestamp, and every job leaving it reports
how long it waited.
"""

from collections.abc import Callable
from typing import Any

from jobclues.config import CluesConfig
from jobclues.constants import (
    ITEM_ARGS,
    ITEM_CLASS,
    ITEM_METADATA,
    META_ENQUEUED_TIME,
    META_TIME_IN_QUEUE,
    EventType,
)
from jobclues.decorators.base import InstrumentationDecorator
from jobclues.metadata import (
    ensure_event_hash,
    ensure_metadata,
    now,
    stamp_origin,
    time_delta_since,
)
from jobclues.types.events import utc_now
from jobclues.types.job import HostQueue, JobItem


class QueueDecorator(InstrumentationDecorator):
    """
    Instrumented stand-in for a host queue.

    The undecorated operations stay reachable as `base_push` and `base_pop`.
    Return values and exceptions of the host operations pass through
    unchanged whether or not instrumentation is enabled.
    """

    def __init__(self, queue: HostQueue, config: CluesConfig | None = None):
        super().__init__(config)
        self._queue = queue

    @property
    def wrapped(self) -> HostQueue:
        return self._queue

    @property
    def base_push(self) -> Callable[[str, JobItem], Any]:
        """The undecorated host push."""
        return self._queue.push

    @property
    def base_pop(self) -> Callable[[str], JobItem | None]:
        """The undecorated host pop."""
        return self._queue.pop

    def push(self, queue: str, item: JobItem) -> Any:
        """
        Push a job item, stamping metadata and publishing `enqueued`.

        The caller's item is not mutated: the host receives a copy with its
        own metadata mapping.
        """
        if not self.enabled:
            return self.base_push(queue, item)

        item = dict(item)
        metadata = item[ITEM_METADATA] = dict(item.get(ITEM_METADATA) or {})
        ensure_event_hash(metadata)

        preprocessor = self.config.item_preprocessor
        if preprocessor is not None:
            preprocessor.mutate(queue, item)
            # The preprocessor may have replaced the mapping
            metadata = ensure_metadata(item)
            ensure_event_hash(metadata)

        stamp_origin(metadata)
        metadata[META_ENQUEUED_TIME] = now()

        self._publish(
            EventType.ENQUEUED,
            utc_now(),
            queue,
            metadata,
            item.get(ITEM_CLASS),
            item.get(ITEM_ARGS) or (),
        )

        return self.base_push(queue, item)

    def pop(self, queue: str) -> JobItem | None:
        """
        Pop a job item, recording its queue wait time and publishing `dequeued`.

        Items without metadata (enqueued before instrumentation was enabled)
        and empty results are returned untouched.
        """
        item = self.base_pop(queue)

        if not self.enabled or not item or item.get(ITEM_METADATA) is None:
            return item

        metadata = item[ITEM_METADATA]
        ensure_event_hash(metadata)
        stamp_origin(metadata)
        time_in_queue = time_delta_since(metadata.get(META_ENQUEUED_TIME))
        metadata[META_TIME_IN_QUEUE] = 0.0 if time_in_queue is None else time_in_queue

        self._publish(
            EventType.DEQUEUED,
            utc_now(),
            queue,
            metadata,
            item.get(ITEM_CLASS),
            item.get(ITEM_ARGS) or (),
        )

        return item

    def __getattr__(self, name: str) -> Any:
        # Everything else the host queue offers (size, peek, ...) is passed through
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._queue, name)
