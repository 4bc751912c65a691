"""
Job Lifecycle Instrumentation

Transparent decorators for a job queue's push/pop and a job's perform/fail
operations that attach correlation identity and timing metadata to each job
and emit lifecycle events to a pluggable publisher.
"""

__version__ = "1.0.0"

from jobclues.config import CluesConfig, build_config, get_settings
from jobclues.constants import EventType
from jobclues.decorators import JobDecorator, QueueDecorator
from jobclues.publishers import EventPublisher, StandardOutPublisher

__all__ = [
    "CluesConfig",
    "build_config",
    "get_settings",
    "EventType",
    "QueueDecorator",
    "JobDecorator",
    "EventPublisher",
    "StandardOutPublisher",
]
