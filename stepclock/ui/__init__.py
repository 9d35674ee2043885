"""UI widgets for StepClock."""

from .preset_panel import PresetPanel
from .step_list import StepListWidget
from .styles import build_stylesheet, STATUS_COLORS
from .time_unit import TimeUnit

__all__ = [
    "PresetPanel",
    "StepListWidget",
    "build_stylesheet",
    "STATUS_COLORS",
    "TimeUnit",
]
