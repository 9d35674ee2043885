"""Countdown state machine for StepClock.

States
------
IDLE       Not counting; counters show the would-be duration.
RUNNING    Ticking once per second.
PAUSED     Frozen; counters held exactly as they were.

Transitions
-----------
IDLE → RUNNING          (start, total duration > 0)
RUNNING → PAUSED        (pause)
PAUSED → RUNNING        (resume)
RUNNING → IDLE          (timer reaches 0)
Any → IDLE              (reset)

Modes
-----
SIMPLE       One duration taken from the time entry.
SEQUENTIAL   The step list is non-empty; steps run back to back and the
             alarm rings at every step boundary.  A finished sequence
             re-seeds itself to step 0, ready to go again.

All live counters sit in a single ``TimerRuntimeState``.  Only the methods
below mutate it, and every mutation happens synchronously on the Qt
thread (either a user command or one ``QTimer`` timeout), so there is no
locking.  The QTimer runs only while RUNNING; ``tick()`` also re-checks
the status so a late timeout can never touch the counters.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..audio.alarm import AlarmController
from ..logger import log
from .entry import TimeEntryModel, TimeField
from .steps import StepSequence, TimerStep, copy_steps


# ── enums ─────────────────────────────────────────────────────────────────


class TimerStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class TimerMode(Enum):
    SIMPLE = "simple"
    SEQUENTIAL = "sequential"


TICK_INTERVAL_MS = 1000


@dataclass
class TimerRuntimeState:
    mode: TimerMode = TimerMode.SIMPLE
    status: TimerStatus = TimerStatus.IDLE
    remaining_overall: int = 0
    remaining_step: int = 0  # sequential only
    active_step_index: int = 0  # sequential only


# ── engine ────────────────────────────────────────────────────────────────


class CountdownEngine(QObject):
    """Tick-driven countdown for simple and sequential timers.

    The engine owns the time entry and the step list and hands each a
    lock predicate, so edits are refused at the right moments without the
    UI having to know the rules.

    Signals
    -------
    remaining_changed(remaining_overall: int, remaining_step: int)
        Emitted whenever either counter changes (ticks and re-seeds).
    state_changed(new_status: TimerStatus)
        Emitted on every status transition.
    step_advanced(new_index: int)
        Emitted when a sequential run moves on to the next step.
    completed()
        Emitted once when a run finishes naturally.
    steps_changed()
        The step list was edited.
    entry_changed()
        The time entry was edited.
    """

    remaining_changed = pyqtSignal(int, int)
    state_changed = pyqtSignal(object)
    step_advanced = pyqtSignal(int)
    completed = pyqtSignal()
    steps_changed = pyqtSignal()
    entry_changed = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        alarm: AlarmController | None = None,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._alarm = alarm
        self._state = TimerRuntimeState()

        # Steps the current run was started with.  Edits made while paused
        # land in ``steps`` and take effect on the next reset/start.
        self._run_steps: tuple[TimerStep, ...] = ()

        self.entry = TimeEntryModel(
            locked=lambda: self._state.status != TimerStatus.IDLE,
            on_change=self._on_entry_changed,
        )
        self.steps = StepSequence(
            locked=lambda: self._state.status == TimerStatus.RUNNING,
            on_change=self._on_steps_changed,
        )

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(tick_interval_ms)
        self._qt_timer.timeout.connect(self.tick)

        self._seed()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerRuntimeState:
        """A copy of the runtime state."""
        return replace(self._state)

    @property
    def status(self) -> TimerStatus:
        return self._state.status

    @property
    def mode(self) -> TimerMode:
        return self._state.mode

    @property
    def remaining_overall(self) -> int:
        return self._state.remaining_overall

    @property
    def remaining_step(self) -> int:
        return self._state.remaining_step

    @property
    def active_step_index(self) -> int:
        return self._state.active_step_index

    @property
    def active_step(self) -> TimerStep | None:
        """The step being counted (or first up, when IDLE)."""
        if self._state.mode != TimerMode.SEQUENTIAL:
            return None
        idx = self._state.active_step_index
        if 0 <= idx < len(self._run_steps):
            return self._run_steps[idx]
        return None

    @property
    def run_step_count(self) -> int:
        """Number of steps in the sequence being counted."""
        return len(self._run_steps)

    @property
    def is_running(self) -> bool:
        return self._state.status == TimerStatus.RUNNING

    @property
    def is_ticking(self) -> bool:
        """True while the periodic tick source is armed."""
        return self._qt_timer.isActive()

    @property
    def alarm(self) -> AlarmController | None:
        return self._alarm

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin a run.  Only valid from IDLE; no-op for a 0 s total."""
        if self._state.status != TimerStatus.IDLE:
            log.debug(f"start() ignored while {self._state.status.value}")
            return
        self._stop_ticking()
        self._seed()
        if self._state.remaining_overall <= 0:
            log.debug("start() ignored: total duration is 0")
            return
        if self._alarm is not None:
            self._alarm.stop()
        log.info(
            f"Timer started ({self._state.mode.value}, "
            f"{self._state.remaining_overall}s, {len(self._run_steps)} steps)"
        )
        self._set_status(TimerStatus.RUNNING)
        self._qt_timer.start()

    def pause(self) -> None:
        if self._state.status != TimerStatus.RUNNING:
            return
        self._stop_ticking()
        log.info(f"Timer paused at {self._state.remaining_overall}s")
        self._set_status(TimerStatus.PAUSED)

    def resume(self) -> None:
        if self._state.status != TimerStatus.PAUSED:
            return
        log.info(f"Timer resumed at {self._state.remaining_overall}s")
        self._set_status(TimerStatus.RUNNING)
        self._qt_timer.start()

    def reset(self) -> None:
        """Back to IDLE with counters re-seeded from the current entry/steps."""
        self._stop_ticking()
        self._seed()
        if self._alarm is not None:
            self._alarm.stop()
        log.info("Timer reset")
        self._set_status(TimerStatus.IDLE)

    def shutdown(self) -> None:
        """Stop ticking for good (application exit)."""
        self._stop_ticking()

    def tick(self) -> None:
        """Process one elapsed second.  Ignored unless RUNNING."""
        if self._state.status != TimerStatus.RUNNING:
            return
        if self._state.mode == TimerMode.SEQUENTIAL:
            self._tick_sequential()
        else:
            self._tick_simple()

    # ── entry / step shortcuts used by the UI ─────────────────────────

    def adjust_entry(self, field: TimeField | str, delta: int) -> bool:
        return self.entry.adjust(field, delta)

    def add_step_from_entry(self, name: str = "") -> TimerStep | None:
        """Append a step whose duration is the current time entry."""
        return self.steps.append(name, self.entry.to_duration_seconds())

    def load_steps(self, steps) -> bool:
        """Replace the step list (preset loading).

        Refused while RUNNING.  A paused run is abandoned so the loaded
        sequence takes over immediately.
        """
        if self._state.status == TimerStatus.RUNNING:
            return False
        if not self.steps.replace(copy_steps(steps)):
            return False
        if self._state.status == TimerStatus.PAUSED:
            self.reset()
        return True

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: tick mechanics
    # ══════════════════════════════════════════════════════════════════

    def _tick_simple(self) -> None:
        s = self._state
        s.remaining_overall = max(0, s.remaining_overall - 1)
        self._emit_remaining()
        if s.remaining_overall == 0:
            self._stop_ticking()
            self._ring()
            log.info("Timer finished")
            self._set_status(TimerStatus.IDLE)
            self.completed.emit()

    def _tick_sequential(self) -> None:
        s = self._state
        s.remaining_overall = max(0, s.remaining_overall - 1)
        s.remaining_step = max(0, s.remaining_step - 1)

        if s.remaining_step > 0 and s.remaining_overall > 0:
            self._emit_remaining()
            return

        is_last = s.active_step_index >= len(self._run_steps) - 1
        if is_last or s.remaining_overall == 0:
            # Whole sequence done: one alarm, then back to step 0.
            self._stop_ticking()
            self._ring()
            log.info(f"Sequence finished after {len(self._run_steps)} steps")
            self._seed()
            self._set_status(TimerStatus.IDLE)
            self.completed.emit()
            return

        self._ring()
        s.active_step_index += 1
        next_step = self._run_steps[s.active_step_index]
        s.remaining_step = next_step.duration
        log.info(f"Step {s.active_step_index + 1}/{len(self._run_steps)}: '{next_step.name}'")
        self._emit_remaining()
        self.step_advanced.emit(s.active_step_index)

    def _seed(self) -> None:
        """Load counters from the current step list or time entry."""
        s = self._state
        s.active_step_index = 0
        if len(self.steps) > 0:
            self._run_steps = self.steps.snapshot()
            s.mode = TimerMode.SEQUENTIAL
            s.remaining_step = self._run_steps[0].duration
            s.remaining_overall = sum(step.duration for step in self._run_steps)
        else:
            self._run_steps = ()
            s.mode = TimerMode.SIMPLE
            s.remaining_step = 0
            s.remaining_overall = self.entry.to_duration_seconds()
        self._emit_remaining()

    def _ring(self) -> None:
        if self._alarm is not None:
            self._alarm.trigger()

    def _stop_ticking(self) -> None:
        self._qt_timer.stop()

    def _set_status(self, new_status: TimerStatus) -> None:
        self._state.status = new_status
        self.state_changed.emit(new_status)

    def _emit_remaining(self) -> None:
        self.remaining_changed.emit(
            self._state.remaining_overall, self._state.remaining_step,
        )

    # ── collaborator callbacks ────────────────────────────────────────

    def _on_steps_changed(self) -> None:
        if self._state.status == TimerStatus.IDLE:
            self._seed()
        elif len(self.steps) == 0 and self._state.mode == TimerMode.SEQUENTIAL:
            self._drop_to_simple()
        self.steps_changed.emit()

    def _drop_to_simple(self) -> None:
        """Finish a paused sequence as a plain countdown of what is left."""
        s = self._state
        self._run_steps = ()
        s.mode = TimerMode.SIMPLE
        s.remaining_step = 0
        s.active_step_index = 0
        log.info(f"Step list emptied; {s.remaining_overall}s left as a simple countdown")
        self._emit_remaining()

    def _on_entry_changed(self) -> None:
        if self._state.status == TimerStatus.IDLE:
            self._seed()
        self.entry_changed.emit()
