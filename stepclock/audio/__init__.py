"""Audio package."""

from .alarm import (
    AlarmController,
    AlarmPlaybackError,
    AlarmSink,
    AlarmState,
    QtAlarmSink,
    SilentAlarmSink,
    AUTO_STOP_SECONDS,
)
from .tone import ensure_alarm_file, generate_alarm_tone

__all__ = [
    "AlarmController",
    "AlarmPlaybackError",
    "AlarmSink",
    "AlarmState",
    "QtAlarmSink",
    "SilentAlarmSink",
    "AUTO_STOP_SECONDS",
    "ensure_alarm_file",
    "generate_alarm_tone",
]
