"""Main application window for StepClock."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QHBoxLayout, QLabel, QLineEdit, QMainWindow, QPushButton,
    QVBoxLayout, QWidget,
)

from .audio.alarm import AlarmController, AlarmSink, AlarmState, QtAlarmSink, SilentAlarmSink
from .logger import log
from .presets.library import PresetLibrary
from .presets.store import PresetStore
from .settings import Settings, load_settings, save_settings
from .timer.engine import CountdownEngine, TimerMode, TimerStatus
from .timer.entry import TimeField, format_hms
from .ui.preset_panel import PresetPanel
from .ui.step_list import StepListWidget
from .ui.styles import STATUS_COLORS, build_stylesheet
from .ui.time_unit import TimeUnit


class StepClockApp(QMainWindow):
    """Main application window.

    Owns the single engine, the alarm and the preset library.  Everything
    timer-related is delegated to them; this class only wires widgets to
    commands and renders the engine's signals.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        store: PresetStore | None = None,
        alarm_sink: AlarmSink | None = None,
        persist_settings: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("StepClock")
        self.setMinimumSize(480, 640)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self._persist_settings = persist_settings
        self._shut_down = False

        # ── collaborators ─────────────────────────────────────────────
        if alarm_sink is None:
            if self._settings.sound_enabled:
                alarm_sink = QtAlarmSink(self, volume=self._settings.sound_volume)
            else:
                alarm_sink = SilentAlarmSink()
        self._alarm = AlarmController(
            alarm_sink, self,
            auto_stop_seconds=self._settings.alarm_auto_stop_seconds,
        )
        self._engine = CountdownEngine(
            self,
            alarm=self._alarm,
            tick_interval_ms=self._settings.tick_interval_ms,
        )
        self._library = PresetLibrary(self._engine, store or PresetStore(), self)

        self.setStyleSheet(build_stylesheet())
        self._build_ui()
        self._connect_signals()

        self._library.load()
        self._restore_geometry()
        self._refresh_all()

    # ── accessors (tests, shortcuts) ──────────────────────────────────────

    @property
    def engine(self) -> CountdownEngine:
        return self._engine

    @property
    def alarm(self) -> AlarmController:
        return self._alarm

    @property
    def library(self) -> PresetLibrary:
        return self._library

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(20, 16, 20, 16)
        root.setSpacing(12)

        # ── countdown display ────────────────────────────────────────
        self._countdown_lbl = QLabel("00:00:00", central)
        self._countdown_lbl.setObjectName("countdown")
        self._countdown_lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._countdown_lbl)

        self._step_lbl = QLabel("", central)
        self._step_lbl.setObjectName("stepLabel")
        self._step_lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._step_lbl)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._reset_btn = QPushButton("Reset", central)
        self._reset_btn.setObjectName("dangerButton")
        self._start_pause_btn = QPushButton("Start", central)
        self._start_pause_btn.setObjectName("primaryButton")
        self._stop_alarm_btn = QPushButton("Stop alarm", central)
        self._stop_alarm_btn.setObjectName("alarmButton")
        self._stop_alarm_btn.setVisible(False)
        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._stop_alarm_btn)
        root.addLayout(btn_row)

        # ── time entry ───────────────────────────────────────────────
        self._name_input = QLineEdit(central)
        self._name_input.setPlaceholderText("Step name (optional)")
        self._name_input.setMaxLength(60)
        root.addWidget(self._name_input)

        entry_row = QHBoxLayout()
        entry_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._units: dict[TimeField, TimeUnit] = {}
        for field, label in (
            (TimeField.HOURS, "Hours"),
            (TimeField.MINUTES, "Minutes"),
            (TimeField.SECONDS, "Seconds"),
        ):
            unit = TimeUnit(label, field.maximum, central)
            unit.adjusted.connect(
                lambda delta, f=field: self._engine.adjust_entry(f, delta)
            )
            self._units[field] = unit
            entry_row.addWidget(unit)
        root.addLayout(entry_row)

        entry_btns = QHBoxLayout()
        self._add_step_btn = QPushButton("Add step", central)
        self._clear_entry_btn = QPushButton("Clear", central)
        entry_btns.addWidget(self._add_step_btn)
        entry_btns.addWidget(self._clear_entry_btn)
        root.addLayout(entry_btns)

        # ── steps + presets ──────────────────────────────────────────
        self._step_list = StepListWidget(central)
        root.addWidget(self._step_list)

        self._preset_panel = PresetPanel(central)
        root.addWidget(self._preset_panel)

        # ── keyboard shortcuts ───────────────────────────────────────
        QShortcut(QKeySequence(Qt.Key.Key_Escape), self, activated=self._alarm.stop)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._stop_alarm_btn.clicked.connect(self._alarm.stop)
        self._add_step_btn.clicked.connect(self._on_add_step)
        self._clear_entry_btn.clicked.connect(self._engine.entry.clear)

        self._step_list.remove_requested.connect(self._engine.steps.remove)
        self._step_list.clear_requested.connect(self._engine.steps.clear)

        self._preset_panel.save_requested.connect(self._library.save_current)
        self._preset_panel.load_requested.connect(self._library.apply)
        self._preset_panel.delete_requested.connect(self._library.delete)

        self._engine.remaining_changed.connect(self._refresh_display)
        self._engine.state_changed.connect(self._on_state_changed)
        self._engine.step_advanced.connect(lambda _idx: self._refresh_step_label())
        self._engine.steps_changed.connect(self._refresh_steps)
        self._engine.entry_changed.connect(self._refresh_entry)
        self._alarm.state_changed.connect(self._on_alarm_state_changed)
        self._library.presets_changed.connect(self._refresh_presets)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        status = self._engine.status
        if status == TimerStatus.RUNNING:
            self._engine.pause()
        elif status == TimerStatus.PAUSED:
            self._engine.resume()
        else:
            self._engine.start()

    def _on_add_step(self) -> None:
        if self._engine.add_step_from_entry(self._name_input.text()) is not None:
            self._name_input.clear()

    def _on_state_changed(self, status: TimerStatus) -> None:
        if status == TimerStatus.RUNNING:
            self._start_pause_btn.setText("Pause")
        elif status == TimerStatus.PAUSED:
            self._start_pause_btn.setText("Resume")
        else:
            self._start_pause_btn.setText("Start")

        idle = status == TimerStatus.IDLE
        running = status == TimerStatus.RUNNING
        for unit in self._units.values():
            unit.set_editable(idle)
        self._clear_entry_btn.setEnabled(idle)
        self._add_step_btn.setEnabled(not running)
        self._step_list.set_editable(not running)
        self._preset_panel.set_can_load(not running)
        self._preset_panel.set_can_save(len(self._engine.steps) > 0)

        self._countdown_lbl.setStyleSheet(f"color: {STATUS_COLORS[status]};")
        self._refresh_step_label()

    def _on_alarm_state_changed(self, state: AlarmState) -> None:
        self._stop_alarm_btn.setVisible(state == AlarmState.SOUNDING)

    # ── rendering ─────────────────────────────────────────────────────────

    def _refresh_all(self) -> None:
        self._refresh_entry()
        self._refresh_steps()
        self._refresh_presets()
        self._refresh_display(self._engine.remaining_overall, self._engine.remaining_step)
        self._on_state_changed(self._engine.status)

    def _refresh_display(self, remaining_overall: int, remaining_step: int) -> None:
        self._countdown_lbl.setText(format_hms(remaining_overall))
        self._refresh_step_label()

    def _refresh_step_label(self) -> None:
        step = self._engine.active_step
        if self._engine.mode != TimerMode.SEQUENTIAL or step is None:
            self._step_lbl.setText("")
            self._step_list.set_active(None)
            return
        idx = self._engine.active_step_index
        total = self._engine.run_step_count
        self._step_lbl.setText(
            f"{step.name} ({idx + 1}/{total})  {format_hms(self._engine.remaining_step)}"
        )
        self._step_list.set_active(step.id if self._engine.status != TimerStatus.IDLE else None)

    def _refresh_entry(self) -> None:
        for field, unit in self._units.items():
            unit.set_value(self._engine.entry.value(field))

    def _refresh_steps(self) -> None:
        steps = self._engine.steps
        self._step_list.set_steps(steps.steps, steps.total_duration())
        self._preset_panel.set_can_save(len(steps) > 0)
        self._refresh_step_label()

    def _refresh_presets(self) -> None:
        self._preset_panel.set_presets(self._library.presets)

    # ── lifecycle ─────────────────────────────────────────────────────────

    def _restore_geometry(self) -> None:
        s = self._settings
        self.resize(s.window_width, s.window_height)
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)

    def shutdown(self) -> None:
        """Stop ticking, release audio, and persist window geometry."""
        if self._shut_down:
            return
        self._shut_down = True
        self._engine.shutdown()
        self._alarm.close()
        if self._persist_settings:
            geo = self.geometry()
            self._settings.window_x = geo.x()
            self._settings.window_y = geo.y()
            self._settings.window_width = geo.width()
            self._settings.window_height = geo.height()
            try:
                save_settings(self._settings)
            except OSError:
                log.exception("Could not save settings")
        log.info("StepClock shut down")

    def closeEvent(self, event: QCloseEvent) -> None:
        self.shutdown()
        super().closeEvent(event)
