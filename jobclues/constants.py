"""
Application constants.
Centralized location for all constant values used across the package.
"""

from enum import StrEnum


class EventType(StrEnum):
    """
    Job lifecycle events.

    Order for a single job instance:
    - ENQUEUED -> DEQUEUED (popped by a worker)
    - DEQUEUED -> PERFORM_STARTED (execution started)
    - PERFORM_STARTED -> PERFORM_FINISHED (success)
    - PERFORM_STARTED -> FAILED (exception during execution)
    """

    ENQUEUED = "enqueued"
    DEQUEUED = "dequeued"
    PERFORM_STARTED = "perform_started"
    PERFORM_FINISHED = "perform_finished"
    FAILED = "failed"


# Job item keys, as stored by the host queue
ITEM_CLASS = "class"
ITEM_ARGS = "args"
ITEM_METADATA = "metadata"

# Metadata keys
META_EVENT_HASH = "event_hash"
META_HOSTNAME = "hostname"
META_PROCESS = "process"
META_ENQUEUED_TIME = "enqueued_time"
META_TIME_IN_QUEUE = "time_in_queue"
META_TIME_TO_PERFORM = "time_to_perform"
META_EXCEPTION_CLASS = "exception_class"
META_EXCEPTION_MESSAGE = "exception_message"
META_EXCEPTION_BACKTRACE = "exception_backtrace"

# Publisher registry names
PUBLISHER_NONE = "none"
PUBLISHER_STDOUT = "stdout"
PUBLISHER_LOG = "log"
PUBLISHER_METRICS = "metrics"
PUBLISHER_TRACING = "tracing"

# Metrics names
METRIC_EVENTS_PUBLISHED = "clues_events_published_total"
METRIC_TIME_IN_QUEUE = "clues_time_in_queue_seconds"
METRIC_TIME_TO_PERFORM = "clues_time_to_perform_seconds"
METRIC_PUBLISH_FAILURES = "clues_publish_failures_total"

# Trace span event attribute prefix
SPAN_ATTRIBUTE_PREFIX = "job"
