"""Hours/minutes/seconds entry for a new duration."""

from __future__ import annotations

from enum import Enum
from typing import Callable


class TimeField(Enum):
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"

    @property
    def maximum(self) -> int:
        return 23 if self is TimeField.HOURS else 59


def format_hms(total_seconds: int) -> str:
    """``3725`` → ``"01:02:05"``."""
    hours, rest = divmod(max(0, total_seconds), 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class TimeEntryModel:
    """Three wrap-around counters the user spins to pick a duration.

    ``locked`` is polled before every mutation; while it returns True
    (the engine is running or paused) the entry is read-only.
    ``on_change`` is called after every effective change.
    """

    def __init__(
        self,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        *,
        locked: Callable[[], bool] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._values: dict[TimeField, int] = {
            TimeField.HOURS: hours % 24,
            TimeField.MINUTES: minutes % 60,
            TimeField.SECONDS: seconds % 60,
        }
        self.locked = locked
        self.on_change = on_change

    @property
    def hours(self) -> int:
        return self._values[TimeField.HOURS]

    @property
    def minutes(self) -> int:
        return self._values[TimeField.MINUTES]

    @property
    def seconds(self) -> int:
        return self._values[TimeField.SECONDS]

    def value(self, field: TimeField | str) -> int:
        return self._values[TimeField(field)]

    @property
    def is_locked(self) -> bool:
        return bool(self.locked and self.locked())

    def adjust(self, field: TimeField | str, delta: int) -> bool:
        """Step *field* by *delta*, wrapping past either end.

        Only single steps (+1 or -1) are accepted.  Returns False (and
        changes nothing) for any other delta or while locked.
        """
        if self.is_locked or delta not in (-1, 1):
            return False
        field = TimeField(field)
        modulus = field.maximum + 1
        self._values[field] = (self._values[field] + delta) % modulus
        self._notify()
        return True

    def clear(self) -> bool:
        """Zero all three fields."""
        if self.is_locked:
            return False
        if any(self._values.values()):
            for field in TimeField:
                self._values[field] = 0
            self._notify()
        return True

    def to_duration_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def __repr__(self) -> str:
        return f"<TimeEntryModel {self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}>"
