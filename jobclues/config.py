"""
Instrumentation configuration.

`Settings` loads process settings from environment variables using Pydantic
Settings. `CluesConfig` is the explicit configuration object handed to the
queue and job decorators: it holds the active publisher (or none, which
turns every decorator into a passthrough) and an optional item preprocessor.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic_settings import BaseSettings, SettingsConfigDict

from jobclues.constants import PUBLISHER_METRICS, PUBLISHER_NONE

if TYPE_CHECKING:
    from jobclues.observability.metrics import MetricsCollector
    from jobclues.publishers.base import EventPublisher


class Settings(BaseSettings):
    """Instrumentation settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLUES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = True

    # Comma-separated publisher registry names, e.g. "stdout,metrics"
    publishers: str = "stdout"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # json or console
    # Also hand package records to the host root handlers
    log_propagate: bool = False

    # Tracing
    otel_service_name: str = "jobclues"
    otel_exporter_otlp_endpoint: str | None = None
    otel_console_export: bool = False

    @property
    def publisher_names(self) -> list[str]:
        """Publisher names with blanks and the "none" marker removed."""
        names = [name.strip().lower() for name in self.publishers.split(",")]
        return [name for name in names if name and name != PUBLISHER_NONE]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@runtime_checkable
class ItemPreprocessor(Protocol):
    """
    Hook run on every enqueued item before the enqueued event is published.

    Implementations mutate `item["metadata"]` in place to attach extra
    keys (tenant or caller identifiers, for example).
    """

    def mutate(self, queue: str, item: dict[str, Any]) -> None: ...


class CallablePreprocessor:
    """Adapts a plain `(queue, item)` callable to `ItemPreprocessor`."""

    def __init__(self, func: Callable[[str, dict[str, Any]], Any]):
        self._func = func

    def mutate(self, queue: str, item: dict[str, Any]) -> None:
        self._func(queue, item)

    def __repr__(self) -> str:
        return f"CallablePreprocessor({self._func!r})"


def as_preprocessor(
    hook: ItemPreprocessor | Callable[[str, dict[str, Any]], Any] | None,
) -> ItemPreprocessor | None:
    """Normalize a preprocessor hook; plain callables are wrapped."""
    if hook is None or isinstance(hook, ItemPreprocessor):
        return hook
    if callable(hook):
        return CallablePreprocessor(hook)
    raise TypeError(f"Item preprocessor must be callable or define mutate(): {hook!r}")


@dataclass
class CluesConfig:
    """
    Configuration shared by the queue and job decorators.

    Decorators read this object on every call, so setting `event_publisher`
    back to None disables instrumentation for all of them at once.
    """

    event_publisher: EventPublisher | None = None
    item_preprocessor: ItemPreprocessor | None = None
    # Receives publish failure counts when set
    metrics: MetricsCollector | None = field(default=None, repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "item_preprocessor":
            value = as_preprocessor(value)
        super().__setattr__(name, value)

    @property
    def enabled(self) -> bool:
        """True when a publisher is configured."""
        return self.event_publisher is not None

    @classmethod
    def disabled(cls) -> "CluesConfig":
        """Create a configuration that turns every decorator into a passthrough."""
        return cls()


def build_config(
    settings: Settings | None = None,
    item_preprocessor: ItemPreprocessor | Callable[[str, dict[str, Any]], Any] | None = None,
) -> CluesConfig:
    """
    Build a configuration from settings.

    When the metrics publisher is selected, its collector also counts
    publish failures.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        item_preprocessor: Optional preprocessor hook.

    Returns:
        CluesConfig: Disabled when instrumentation is off or no publisher is named.

    Raises:
        UnknownPublisherError: If a publisher name is not registered.
    """
    from jobclues.observability.metrics import get_metrics
    from jobclues.publishers import CompositePublisher, create_publisher

    settings = settings or get_settings()
    names = settings.publisher_names

    if not settings.enabled or not names:
        return CluesConfig(item_preprocessor=item_preprocessor)

    publishers = [create_publisher(name) for name in names]
    publisher = publishers[0] if len(publishers) == 1 else CompositePublisher(publishers)

    metrics = get_metrics() if PUBLISHER_METRICS in names else None

    return CluesConfig(
        event_publisher=publisher,
        item_preprocessor=item_preprocessor,
        metrics=metrics,
    )
