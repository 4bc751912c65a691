"""
Interfaces consumed from the host job-queue system.
"""

from typing import Any, Protocol, runtime_checkable

# A job item as pushed to and popped from the host queue:
# {"class": str, "args": list, "metadata": dict (optional)}
JobItem = dict[str, Any]


@runtime_checkable
class HostQueue(Protocol):
    """Storage and transport of job items, owned by the host."""

    def push(self, queue: str, item: JobItem) -> Any: ...

    def pop(self, queue: str) -> JobItem | None: ...


@runtime_checkable
class HostJob(Protocol):
    """
    A job instance as executed by a host worker.

    `payload` is the item popped from the queue.
    """

    queue: str
    payload: JobItem

    def perform(self) -> Any: ...

    def fail(self, exception: BaseException) -> Any: ...
