"""
Event publishers.

Importing this package registers the built-in publishers by name.
"""

from jobclues.publishers.base import (
    EventPublisher,
    create_publisher,
    get_publisher_factory,
    list_publishers,
    register_publisher,
)
from jobclues.publishers.composite import CompositePublisher
from jobclues.publishers.log import LogPublisher
from jobclues.publishers.metrics import MetricsPublisher
from jobclues.publishers.stream import StandardOutPublisher, StreamPublisher
from jobclues.publishers.tracing import TracingPublisher

__all__ = [
    "EventPublisher",
    "register_publisher",
    "get_publisher_factory",
    "list_publishers",
    "create_publisher",
    "CompositePublisher",
    "LogPublisher",
    "MetricsPublisher",
    "StandardOutPublisher",
    "StreamPublisher",
    "TracingPublisher",
]
