"""
Correlation and timing helpers for job metadata.

Metadata travels inside the job item through the host queue, so every value
written here must survive JSON serialization: timestamps are epoch seconds
and durations are float seconds.
"""

import os
import socket
import time
import traceback
from typing import Any
from uuid import uuid4

from jobclues.constants import (
    ITEM_METADATA,
    META_EVENT_HASH,
    META_EXCEPTION_BACKTRACE,
    META_EXCEPTION_CLASS,
    META_EXCEPTION_MESSAGE,
    META_HOSTNAME,
    META_PROCESS,
)


def generate_event_hash() -> str:
    """Generate a correlation id for a single job instance."""
    return uuid4().hex


def hostname() -> str:
    """Name of the host running the current process."""
    return socket.gethostname()


def now() -> float:
    """Current wall-clock time in epoch seconds."""
    return time.time()


def time_delta_since(start: Any, end: float | None = None) -> float | None:
    """
    Seconds elapsed since a wall-clock timestamp.

    Args:
        start: Epoch seconds, possibly recorded on another host.
        end: Epoch seconds to measure to. Defaults to now.

    Returns:
        Elapsed seconds, clamped at zero to absorb clock skew between hosts,
        or None when `start` is missing or not a number (metadata written by
        another producer, such as an ISO string).
    """
    if start is None or isinstance(start, bool):
        return None
    try:
        start = float(start)
    except (TypeError, ValueError):
        return None
    end = now() if end is None else end
    return max(0.0, end - start)


def ensure_metadata(item: dict[str, Any]) -> dict[str, Any]:
    """Return the item's metadata mapping, creating an empty one if absent."""
    metadata = item.get(ITEM_METADATA)
    if metadata is None:
        metadata = item[ITEM_METADATA] = {}
    return metadata


def ensure_event_hash(metadata: dict[str, Any]) -> str:
    """Assign an event hash unless one is already present, and return it."""
    event_hash = metadata.get(META_EVENT_HASH)
    if not event_hash:
        event_hash = metadata[META_EVENT_HASH] = generate_event_hash()
    return event_hash


def stamp_origin(metadata: dict[str, Any]) -> dict[str, Any]:
    """Record the current host and process id on the metadata."""
    metadata[META_HOSTNAME] = hostname()
    metadata[META_PROCESS] = os.getpid()
    return metadata


def exception_class_name(exc: BaseException) -> str:
    """Qualified class name of an exception, e.g. `builtins.ValueError`."""
    cls = type(exc)
    return f"{cls.__module__}.{cls.__qualname__}"


def record_exception(metadata: dict[str, Any], exc: BaseException) -> dict[str, Any]:
    """
    Record exception details on the metadata.

    The backtrace is the list of formatted traceback entries; it is empty
    when the exception was never raised.
    """
    metadata[META_EXCEPTION_CLASS] = exception_class_name(exc)
    metadata[META_EXCEPTION_MESSAGE] = str(exc)
    metadata[META_EXCEPTION_BACKTRACE] = [
        line.rstrip("\n") for line in traceback.format_tb(exc.__traceback__)
    ]
    return metadata
