"""
Type definitions for the instrumentation layer.
"""

from jobclues.types.events import LifecycleEvent, utc_now
from jobclues.types.job import HostJob, HostQueue, JobItem

__all__ = [
    # Event types
    "LifecycleEvent",
    "utc_now",
    # Host interfaces
    "HostQueue",
    "HostJob",
    "JobItem",
]
