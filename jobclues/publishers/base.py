"""
Event publisher capability and registry.

A publisher receives every lifecycle event emitted by the queue and job
decorators. Implementations must accept the full `publish` signature;
any sink (stream, log, metrics backend, tracing exporter) satisfying it can
be swapped in without touching the decorators.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any

from jobclues.constants import EventType
from jobclues.errors import UnknownPublisherError

logger = logging.getLogger(__name__)

# Type alias for publisher factories
PublisherFactory = Callable[[], "EventPublisher"]

# Publisher registry
_factories: dict[str, PublisherFactory] = {}


class EventPublisher(ABC):
    """Receives and externalizes job lifecycle events."""

    @abstractmethod
    def publish(
        self,
        event_type: EventType,
        timestamp: datetime,
        queue: str,
        metadata: dict[str, Any],
        job_class: str | None,
        *job_args: Any,
    ) -> None:
        """
        Publish a single lifecycle event.

        Args:
            event_type: The lifecycle transition.
            timestamp: When the transition happened.
            queue: Name of the queue the job belongs to.
            metadata: The job's metadata at this stage.
            job_class: Name of the job class.
            *job_args: The job's arguments.
        """

    @property
    def name(self) -> str:
        """Name used in logs and metrics labels."""
        return type(self).__name__


def register_publisher(name: str) -> Callable[[PublisherFactory], PublisherFactory]:
    """
    Decorator to register a publisher factory under a settings name.

    Args:
        name: The name used in `Settings.publishers`.

    Returns:
        Decorator function.

    Example:
        @register_publisher("stdout")
        class StandardOutPublisher(StreamPublisher):
            ...
    """
    def decorator(factory: PublisherFactory) -> PublisherFactory:
        _factories[name] = factory
        logger.debug(f"Registered publisher: {name}")
        return factory
    return decorator


def get_publisher_factory(name: str) -> PublisherFactory | None:
    """
    Get the factory registered under a name.

    Args:
        name: The publisher name.

    Returns:
        The factory or None if not found.
    """
    return _factories.get(name)


def list_publishers() -> list[str]:
    """List all registered publisher names."""
    return list(_factories.keys())


def create_publisher(name: str) -> EventPublisher:
    """
    Instantiate the publisher registered under a name.

    Raises:
        UnknownPublisherError: If nothing is registered under `name`.
    """
    factory = get_publisher_factory(name)
    if factory is None:
        raise UnknownPublisherError(name)
    return factory()
