"""Greedy stage-by-stage job shop scheduler.

Exports the data model, the timeline allocator, the scheduler and the
instance loaders.
"""

from jobshop.heuristics import HEURISTICS, Heuristic, get_heuristic  # noqa: F401
from jobshop.models import DataInstance, Job, Operation, Schedule  # noqa: F401
from jobshop.parser import load_instance, parse_taillard_data  # noqa: F401
from jobshop.scheduler import (  # noqa: F401
    ConfigurationError,
    Scheduler,
    SchedulingError,
    schedule_instance,
)
from jobshop.timeline import INFINITY, Interval, Timeline  # noqa: F401

__all__ = [
    "ConfigurationError",
    "DataInstance",
    "HEURISTICS",
    "Heuristic",
    "INFINITY",
    "Interval",
    "Job",
    "Operation",
    "Schedule",
    "Scheduler",
    "SchedulingError",
    "Timeline",
    "get_heuristic",
    "load_instance",
    "parse_taillard_data",
    "schedule_instance",
]
