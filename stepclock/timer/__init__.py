"""Timer package."""

from .engine import (
    CountdownEngine,
    TimerMode,
    TimerRuntimeState,
    TimerStatus,
    TICK_INTERVAL_MS,
)
from .entry import TimeEntryModel, TimeField, format_hms
from .steps import StepSequence, TimerStep, copy_steps, new_id

__all__ = [
    "CountdownEngine",
    "TimerMode",
    "TimerRuntimeState",
    "TimerStatus",
    "TICK_INTERVAL_MS",
    "TimeEntryModel",
    "TimeField",
    "format_hms",
    "StepSequence",
    "TimerStep",
    "copy_steps",
    "new_id",
]
