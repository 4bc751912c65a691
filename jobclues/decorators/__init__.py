"""
Queue and job decorators.
"""

from jobclues.decorators.base import InstrumentationDecorator
from jobclues.decorators.job import JobDecorator
from jobclues.decorators.queue import QueueDecorator

__all__ = [
    "InstrumentationDecorator",
    "JobDecorator",
    "QueueDecorator",
]
