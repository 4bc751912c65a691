"""
Exception types raised by the instrumentation layer.

Host exceptions raised by push, pop, perform and fail are never wrapped in
these; they propagate unchanged.
"""


class CluesError(Exception):
    """Base class for instrumentation errors."""


class PluginLintError(CluesError):
    """A decorator class does not satisfy the host plugin contract."""


class UnknownPublisherError(CluesError, KeyError):
    """A publisher name in the settings has no registered factory."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No publisher registered under name: {self.name!r}"
