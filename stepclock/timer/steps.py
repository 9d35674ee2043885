"""Ordered, named step durations for sequential ("interval") timers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Iterator


def new_id() -> str:
    """Opaque unique token for steps and presets."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class TimerStep:
    id: str
    name: str
    duration: int  # seconds, >= 1

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "duration": self.duration}

    @classmethod
    def from_dict(cls, data: dict) -> "TimerStep":
        duration = int(data["duration"])
        if duration < 1:
            raise ValueError(f"step duration must be >= 1, got {duration}")
        return cls(id=str(data["id"]), name=str(data["name"]), duration=duration)


def copy_steps(steps: Iterable[TimerStep]) -> tuple[TimerStep, ...]:
    """Independent copies of *steps*, order preserved."""
    return tuple(replace(step) for step in steps)


class StepSequence:
    """The live list of steps, in execution order.

    Structural edits are refused while ``locked()`` is True (the engine is
    running).  ``on_change`` fires after every effective edit so the engine
    can re-seed its counters.
    """

    def __init__(
        self,
        steps: Iterable[TimerStep] = (),
        *,
        locked: Callable[[], bool] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._steps: list[TimerStep] = list(copy_steps(steps))
        self.locked = locked
        self.on_change = on_change

    # ── read access ───────────────────────────────────────────────────

    @property
    def steps(self) -> tuple[TimerStep, ...]:
        return tuple(self._steps)

    @property
    def is_locked(self) -> bool:
        return bool(self.locked and self.locked())

    def total_duration(self) -> int:
        return sum(step.duration for step in self._steps)

    def snapshot(self) -> tuple[TimerStep, ...]:
        return copy_steps(self._steps)

    def index_of(self, step_id: str) -> int | None:
        for i, step in enumerate(self._steps):
            if step.id == step_id:
                return i
        return None

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[TimerStep]:
        return iter(tuple(self._steps))

    def __getitem__(self, idx: int) -> TimerStep:
        return self._steps[idx]

    # ── edits ─────────────────────────────────────────────────────────

    def append(self, name: str, duration_seconds: int) -> TimerStep | None:
        """Add a step at the end.

        Zero or negative durations are ignored.  A blank name becomes
        ``"Step {n}"``.
        """
        if self.is_locked or duration_seconds <= 0:
            return None
        name = (name or "").strip() or f"Step {len(self._steps) + 1}"
        step = TimerStep(id=new_id(), name=name, duration=int(duration_seconds))
        self._steps.append(step)
        self._notify()
        return step

    def remove(self, step_id: str) -> bool:
        if self.is_locked:
            return False
        idx = self.index_of(step_id)
        if idx is None:
            return False
        del self._steps[idx]
        self._notify()
        return True

    def clear(self) -> bool:
        if self.is_locked:
            return False
        if self._steps:
            self._steps.clear()
            self._notify()
        return True

    def replace(self, steps: Iterable[TimerStep]) -> bool:
        """Swap the whole list for copies of *steps* (preset loading)."""
        if self.is_locked:
            return False
        self._steps = list(copy_steps(steps))
        self._notify()
        return True

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def __repr__(self) -> str:
        return f"<StepSequence steps={len(self._steps)} total={self.total_duration()}s>"
