"""
Host plugin contract.

A host loading the decorators checks them structurally: each decorator
implements one recognised pair of operations and exposes the undecorated
originals under `base_` names so decoration can be detected and chained.
"""

import inspect
from typing import Any

from jobclues.config import CluesConfig
from jobclues.decorators import JobDecorator, QueueDecorator
from jobclues.errors import PluginLintError
from jobclues.types.job import HostJob, HostQueue

# Operation pairs a decorator may implement
HOOK_PAIRS: tuple[tuple[str, str], ...] = (
    ("push", "pop"),
    ("perform", "fail"),
)

BASE_PREFIX = "base_"

# Callback-style hook prefixes a host could otherwise demand
_CALLBACK_PREFIXES = ("before_", "after_", "around_", "on_failure")


def lint(decorator_cls: type) -> None:
    """
    Check a decorator class against the plugin contract.

    Args:
        decorator_cls: The decorator class to check.

    Raises:
        PluginLintError: If the class implements no recognised operation pair,
            does not expose the originals, or declares callback hooks.
    """
    if not inspect.isclass(decorator_cls):
        raise PluginLintError(f"{decorator_cls!r} is not a class")

    name = decorator_cls.__name__
    pairs = [pair for pair in HOOK_PAIRS if all(_has_callable(decorator_cls, op) for op in pair)]
    if not pairs:
        expected = " or ".join("+".join(pair) for pair in HOOK_PAIRS)
        raise PluginLintError(f"{name} must implement {expected}")

    for pair in pairs:
        for op in pair:
            base_name = f"{BASE_PREFIX}{op}"
            if not hasattr(decorator_cls, base_name):
                raise PluginLintError(f"{name} must expose the original {op} as {base_name}")

    hooks = sorted(
        attr for attr in dir(decorator_cls)
        if attr.startswith(_CALLBACK_PREFIXES)
    )
    if hooks:
        raise PluginLintError(f"{name} declares unsupported hooks: {', '.join(hooks)}")


def _has_callable(cls: type, attr: str) -> bool:
    return callable(getattr(cls, attr, None))


def instrument_queue(queue: HostQueue, config: CluesConfig | None = None) -> QueueDecorator:
    """Wrap a host queue unless it is already decorated."""
    if isinstance(queue, QueueDecorator):
        return queue
    return QueueDecorator(queue, config)


def instrument_job(job: HostJob, config: CluesConfig | None = None) -> JobDecorator:
    """Wrap a host job unless it is already decorated."""
    if isinstance(job, JobDecorator):
        return job
    return JobDecorator(job, config)


def is_instrumented(obj: Any) -> bool:
    """True if `obj` is a queue or job decorator."""
    return isinstance(obj, (QueueDecorator, JobDecorator))
