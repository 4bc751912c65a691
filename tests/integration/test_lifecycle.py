"""
Integration tests for the full job lifecycle.

Jobs travel through an in-memory queue that stores items as JSON, so the
correlation id and timestamps cross a real serialization boundary.
"""

import io
import json
import time
from typing import Any

import pytest
from conftest import TEST_QUEUE, FakeJob, InMemoryQueue, RecordingPublisher, make_item

from jobclues.config import CluesConfig
from jobclues.constants import EventType
from jobclues.decorators import JobDecorator, QueueDecorator
from jobclues.publishers import CompositePublisher, MetricsPublisher, StreamPublisher


def work_one(queue: QueueDecorator, config: CluesConfig, **job_options: Any) -> JobDecorator | None:
    """Pop one item and run it the way a host worker would."""
    item = queue.pop(TEST_QUEUE)
    if item is None:
        return None

    job = JobDecorator(FakeJob(TEST_QUEUE, item, **job_options), config)
    try:
        job.perform()
    except Exception as e:
        job.fail(e)
    return job


class TestLifecycle:
    """End-to-end tests for instrumented enqueue, dequeue and execution."""

    @pytest.fixture
    def queue(self, host_queue: InMemoryQueue, config: CluesConfig) -> QueueDecorator:
        return QueueDecorator(host_queue, config)

    def test_successful_job(self, queue, config, recorder: RecordingPublisher):
        """Test a job produces the four success events with one event hash."""
        assert queue.push(TEST_QUEUE, make_item()) == "received"

        job = work_one(queue, config)

        assert job is not None
        assert job.perform_calls == 1
        assert recorder.event_types == [
            EventType.ENQUEUED,
            EventType.DEQUEUED,
            EventType.PERFORM_STARTED,
            EventType.PERFORM_FINISHED,
        ]
        assert len({event.event_hash for event in recorder.events}) == 1
        assert all(event.job_args == [1, 2] for event in recorder.events)

    def test_metadata_accumulates_across_stages(self, queue, config, recorder):
        """Test fields written at earlier stages persist to the final event."""
        queue.push(TEST_QUEUE, make_item())
        work_one(queue, config)

        enqueued = recorder.of_type(EventType.ENQUEUED).metadata
        dequeued = recorder.of_type(EventType.DEQUEUED).metadata
        finished = recorder.of_type(EventType.PERFORM_FINISHED).metadata

        assert dequeued["enqueued_time"] == enqueued["enqueued_time"]
        assert dequeued["time_in_queue"] >= 0
        assert finished["enqueued_time"] == enqueued["enqueued_time"]
        assert finished["time_in_queue"] == dequeued["time_in_queue"]
        assert finished["time_to_perform"] >= 0

    def test_time_in_queue_tracks_wait(self, queue, config, recorder):
        """Test time_in_queue approximates the wall-clock wait."""
        queue.push(TEST_QUEUE, make_item())
        time.sleep(0.05)
        queue.pop(TEST_QUEUE)

        time_in_queue = recorder.of_type(EventType.DEQUEUED).metadata["time_in_queue"]
        assert 0.04 <= time_in_queue < 5

    def test_failed_job(self, queue, config, recorder):
        """Test a raising job produces a failed event and reaches the host fail."""
        error = RuntimeError("test")
        queue.push(TEST_QUEUE, make_item())

        job = work_one(queue, config, error=error)

        assert recorder.event_types == [
            EventType.ENQUEUED,
            EventType.DEQUEUED,
            EventType.PERFORM_STARTED,
            EventType.FAILED,
        ]
        failed = recorder.of_type(EventType.FAILED)
        assert failed.event_hash == recorder.events[0].event_hash
        assert failed.metadata["exception_class"] == "builtins.RuntimeError"
        assert failed.metadata["exception_message"] == "test"
        assert failed.metadata["exception_backtrace"]
        assert failed.metadata["time_to_perform"] >= 0
        assert job.failures == [error]

    def test_preprocessor_data_survives_queue(self, host_queue, recorder):
        """Test custom metadata injected at enqueue is present at execution."""
        config = CluesConfig(
            event_publisher=recorder,
            item_preprocessor=lambda queue, item: item["metadata"].update(employer_id=1),
        )
        queue = QueueDecorator(host_queue, config)

        queue.push(TEST_QUEUE, make_item())
        work_one(queue, config)

        assert all(event.metadata["employer_id"] == 1 for event in recorder.events)

    def test_job_enqueued_before_instrumentation(self, host_queue, recorder):
        """Test items pushed while disabled are processed without events."""
        config = CluesConfig.disabled()
        queue = QueueDecorator(host_queue, config)
        queue.push(TEST_QUEUE, make_item())

        config.event_publisher = recorder
        job = work_one(queue, config)

        assert job.perform_calls == 1
        assert recorder.events == []

    def test_disabled_is_passthrough(self, host_queue, disabled_config):
        """Test a disabled pipeline behaves exactly like the bare host."""
        queue = QueueDecorator(host_queue, disabled_config)

        assert queue.push(TEST_QUEUE, make_item()) == "received"
        job = work_one(queue, disabled_config)

        assert job.payload == make_item()
        assert host_queue.pushed == [make_item()]

    def test_empty_queue(self, queue, config, recorder):
        """Test a worker polling an empty queue sees nothing."""
        assert work_one(queue, config) is None
        assert recorder.events == []

    def test_multiple_sinks(self, host_queue, metrics, registry):
        """Test events fan out to a stream and to metrics at once."""
        stream = io.StringIO()
        config = CluesConfig(
            event_publisher=CompositePublisher([StreamPublisher(stream), MetricsPublisher(metrics)]),
        )
        queue = QueueDecorator(host_queue, config)

        queue.push(TEST_QUEUE, make_item())
        work_one(queue, config)

        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert [line["event_type"] for line in lines] == [
            "enqueued",
            "dequeued",
            "perform_started",
            "perform_finished",
        ]
        assert len({line["metadata"]["event_hash"] for line in lines}) == 1
        assert registry.get_sample_value(
            "clues_time_to_perform_seconds_count",
            {"queue": TEST_QUEUE, "job_class": "TestWorker", "status": "finished"},
        ) == 1.0
