"""
Job decorator.

Wraps a host job's perform and fail to publish execution events and record
how long the job ran. Exceptions raised by the job are never caught here:
they propagate to the host, which reports them through `fail`.
"""

import time
from collections.abc import Callable
from typing import Any

from jobclues.config import CluesConfig
from jobclues.constants import (
    ITEM_ARGS,
    ITEM_CLASS,
    ITEM_METADATA,
    META_ENQUEUED_TIME,
    META_TIME_TO_PERFORM,
    EventType,
)
from jobclues.decorators.base import InstrumentationDecorator
from jobclues.metadata import (
    ensure_event_hash,
    record_exception,
    stamp_origin,
    time_delta_since,
)
from jobclues.observability.logging import bound_context
from jobclues.types.events import utc_now
from jobclues.types.job import HostJob, JobItem


class JobDecorator(InstrumentationDecorator):
    """
    Instrumented stand-in for a host job instance.

    The undecorated operations stay reachable as `base_perform` and
    `base_fail`. One decorator wraps one job instance; the perform start
    marker it keeps is what `fail` measures execution time from.
    """

    def __init__(self, job: HostJob, config: CluesConfig | None = None):
        super().__init__(config)
        self._job = job
        self._perform_started_at: float | None = None

    @property
    def wrapped(self) -> HostJob:
        return self._job

    @property
    def base_perform(self) -> Callable[[], Any]:
        """The undecorated host perform."""
        return self._job.perform

    @property
    def base_fail(self) -> Callable[[BaseException], Any]:
        """The undecorated host fail."""
        return self._job.fail

    @property
    def queue(self) -> str:
        return self._job.queue

    @property
    def payload(self) -> JobItem:
        return self._job.payload

    @property
    def job_class(self) -> str | None:
        return self.payload.get(ITEM_CLASS)

    @property
    def job_args(self) -> list[Any]:
        return self.payload.get(ITEM_ARGS) or []

    @property
    def metadata(self) -> dict[str, Any] | None:
        return self.payload.get(ITEM_METADATA)

    def _instrumented(self) -> bool:
        # Jobs enqueued without instrumentation carry no metadata to enrich
        return self.enabled and self.metadata is not None

    def perform(self) -> Any:
        """
        Perform the job, publishing `perform_started` and `perform_finished`.

        Returns:
            Whatever the host perform returns.
        """
        if not self._instrumented():
            return self.base_perform()

        metadata = self.metadata
        event_hash = ensure_event_hash(metadata)
        stamp_origin(metadata)

        self._perform_started_at = time.monotonic()
        self._publish(
            EventType.PERFORM_STARTED,
            utc_now(),
            self.queue,
            metadata,
            self.job_class,
            self.job_args,
        )

        with bound_context(event_hash=event_hash, job_class=self.job_class, queue=str(self.queue)):
            result = self.base_perform()

        metadata[META_TIME_TO_PERFORM] = time.monotonic() - self._perform_started_at
        self._publish(
            EventType.PERFORM_FINISHED,
            utc_now(),
            self.queue,
            metadata,
            self.job_class,
            self.job_args,
        )

        return result

    def fail(self, exception: BaseException) -> Any:
        """
        Report a job failure, publishing `failed` before handing the very
        same exception to the host fail.

        Execution time is measured from the perform start marker. When the
        job failed before `perform` ran through this decorator it falls back
        to the time since enqueue, and to 0.0 if that is unknown too.

        Returns:
            Whatever the host fail returns.
        """
        if not self._instrumented():
            return self.base_fail(exception)

        metadata = self.metadata
        ensure_event_hash(metadata)
        stamp_origin(metadata)

        if self._perform_started_at is not None:
            time_to_perform = time.monotonic() - self._perform_started_at
        else:
            time_to_perform = time_delta_since(metadata.get(META_ENQUEUED_TIME))
        metadata[META_TIME_TO_PERFORM] = 0.0 if time_to_perform is None else time_to_perform

        record_exception(metadata, exception)

        self._publish(
            EventType.FAILED,
            utc_now(),
            self.queue,
            metadata,
            self.job_class,
            self.job_args,
        )

        return self.base_fail(exception)

    def __getattr__(self, name: str) -> Any:
        # Everything else the host job offers is passed through
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._job, name)
