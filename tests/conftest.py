"""
Pytest configuration and shared fixtures.
"""

import copy
import json
from collections import defaultdict, deque
from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest
from prometheus_client import CollectorRegistry

from jobclues.config import CluesConfig
from jobclues.constants import EventType
from jobclues.observability.metrics import MetricsCollector
from jobclues.publishers.base import EventPublisher
from jobclues.types.events import LifecycleEvent

TEST_QUEUE = "test_queue"


class RecordingPublisher(EventPublisher):
    """Publisher that keeps every event, with a snapshot of its metadata."""

    def __init__(self) -> None:
        self.events: list[LifecycleEvent] = []
        self.timestamps: list[datetime] = []

    def publish(
        self,
        event_type: EventType,
        timestamp: datetime,
        queue: str,
        metadata: dict[str, Any],
        job_class: str | None,
        *job_args: Any,
    ) -> None:
        self.timestamps.append(timestamp)
        self.events.append(
            LifecycleEvent.from_publish_args(
                event_type, timestamp, queue, copy.deepcopy(metadata), job_class, *job_args
            )
        )

    @property
    def event_types(self) -> list[EventType]:
        return [event.event_type for event in self.events]

    def of_type(self, event_type: EventType) -> LifecycleEvent:
        """Get the single event of a type."""
        matching = [event for event in self.events if event.event_type == event_type]
        assert len(matching) == 1, f"expected one {event_type} event, got {len(matching)}"
        return matching[0]


class ExplodingPublisher(EventPublisher):
    """Publisher whose sink is down."""

    def __init__(self) -> None:
        self.attempts = 0

    def publish(self, event_type, timestamp, queue, metadata, job_class, *job_args) -> None:
        self.attempts += 1
        raise ConnectionError("event sink unavailable")


class InMemoryQueue:
    """
    Host queue storing items as JSON strings, like a Redis-backed queue.

    Metadata therefore crosses a real serialization boundary between push
    and pop.
    """

    def __init__(self, push_result: Any = "received"):
        self.push_result = push_result
        self.pushed: list[dict[str, Any]] = []
        self._queues: dict[str, deque[str]] = defaultdict(deque)

    def push(self, queue: str, item: dict[str, Any]) -> Any:
        self.pushed.append(item)
        self._queues[queue].append(json.dumps(item))
        return self.push_result

    def pop(self, queue: str) -> dict[str, Any] | None:
        pending = self._queues.get(queue)
        if not pending:
            return None
        return json.loads(pending.popleft())

    def size(self, queue: str) -> int:
        return len(self._queues[queue])


class FakeJob:
    """Host job that records how it was performed and failed."""

    def __init__(
        self,
        queue: str,
        payload: dict[str, Any],
        result: Any = "performed",
        error: BaseException | None = None,
        on_perform: Callable[[], None] | None = None,
    ):
        self.queue = queue
        self.payload = payload
        self.result = result
        self.error = error
        self.on_perform = on_perform
        self.perform_calls = 0
        self.failures: list[BaseException] = []

    def perform(self) -> Any:
        self.perform_calls += 1
        if self.on_perform is not None:
            self.on_perform()
        if self.error is not None:
            raise self.error
        return self.result

    def fail(self, exception: BaseException) -> Any:
        self.failures.append(exception)
        return "failure recorded"


def make_item(**overrides: Any) -> dict[str, Any]:
    """Create a job item for TestWorker with args [1, 2]."""
    item: dict[str, Any] = {"class": "TestWorker", "args": [1, 2]}
    item.update(overrides)
    return item


@pytest.fixture
def base_item() -> Callable[..., dict[str, Any]]:
    """Factory for job items."""
    return make_item


@pytest.fixture
def recorder() -> RecordingPublisher:
    """Create a recording publisher."""
    return RecordingPublisher()


@pytest.fixture
def config(recorder: RecordingPublisher) -> CluesConfig:
    """Create an enabled configuration publishing to the recorder."""
    return CluesConfig(event_publisher=recorder)


@pytest.fixture
def disabled_config() -> CluesConfig:
    """Create a configuration with instrumentation turned off."""
    return CluesConfig.disabled()


@pytest.fixture
def host_queue() -> InMemoryQueue:
    """Create an in-memory host queue."""
    return InMemoryQueue()


@pytest.fixture
def registry() -> CollectorRegistry:
    """Create an isolated Prometheus registry."""
    return CollectorRegistry()


@pytest.fixture
def metrics(registry: CollectorRegistry) -> MetricsCollector:
    """Create a metrics collector on the isolated registry."""
    return MetricsCollector(registry=registry)
