"""Alarm controller and audio sinks.

States
------
SILENT     Nothing playing.
SOUNDING   Alarm tone looping; an auto-stop deadline is pending.

``trigger()`` while SOUNDING restarts the tone from the beginning and
re-arms the deadline, so an alarm at a step boundary rings afresh rather
than continuing where the previous one was.

The controller never lets an audio failure escape: errors from the sink
are logged and the state still moves, so the timer keeps working on
machines without a usable audio device.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Protocol

from PyQt6.QtCore import QObject, QTimer, QUrl, pyqtSignal
from PyQt6.QtMultimedia import QSoundEffect

from ..logger import log
from .tone import ensure_alarm_file


AUTO_STOP_SECONDS = 60


class AlarmState(Enum):
    SILENT = "silent"
    SOUNDING = "sounding"


class AlarmPlaybackError(RuntimeError):
    """The audio backend could not play the alarm tone."""


# ══════════════════════════════════════════════════════════════════════════
#  SINKS
# ══════════════════════════════════════════════════════════════════════════


class AlarmSink(Protocol):
    def play_looping(self) -> None: ...

    def stop_playing(self) -> None: ...

    def restart_from_beginning(self) -> None: ...

    def release(self) -> None: ...


class SilentAlarmSink:
    """Sink used when sound is disabled in settings."""

    def play_looping(self) -> None:
        log.debug("Alarm (silent sink): play")

    def stop_playing(self) -> None:
        pass

    def restart_from_beginning(self) -> None:
        log.debug("Alarm (silent sink): restart")

    def release(self) -> None:
        pass


class QtAlarmSink(QObject):
    """Loops the synthesized alarm WAV through ``QSoundEffect``."""

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        volume: int = 70,
    ) -> None:
        super().__init__(parent)
        self._volume = 0.7  # 0.0–1.0
        self._path = ensure_alarm_file(sounds_dir)
        self._effect: QSoundEffect | None = QSoundEffect(self)
        self._effect.setSource(QUrl.fromLocalFile(str(self._path)))
        self._effect.setLoopCount(QSoundEffect.Loop.Infinite.value)
        self.set_volume(volume)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._volume = max(0, min(level, 100)) / 100.0
        if self._effect is not None:
            self._effect.setVolume(self._volume)

    def play_looping(self) -> None:
        effect = self._require_effect()
        if effect.status() == QSoundEffect.Status.Error:
            raise AlarmPlaybackError(f"could not load alarm tone '{self._path}'")
        effect.play()

    def stop_playing(self) -> None:
        if self._effect is not None:
            self._effect.stop()

    def restart_from_beginning(self) -> None:
        # QSoundEffect cannot seek; stop + play starts at sample 0.
        self.stop_playing()
        self.play_looping()

    def release(self) -> None:
        if self._effect is None:
            return
        self._effect.stop()
        self._effect.setSource(QUrl())
        self._effect.deleteLater()
        self._effect = None

    def _require_effect(self) -> QSoundEffect:
        if self._effect is None:
            raise AlarmPlaybackError("alarm sink already released")
        return self._effect


# ══════════════════════════════════════════════════════════════════════════
#  CONTROLLER
# ══════════════════════════════════════════════════════════════════════════


class AlarmController(QObject):
    """Starts and stops the audible alert, with a bounded auto-stop.

    Signals
    -------
    state_changed(new_state: AlarmState)
        Emitted on SILENT ⇄ SOUNDING transitions.
    """

    state_changed = pyqtSignal(object)

    def __init__(
        self,
        sink: AlarmSink,
        parent: QObject | None = None,
        *,
        auto_stop_seconds: float = AUTO_STOP_SECONDS,
    ) -> None:
        super().__init__(parent)
        self._sink: AlarmSink | None = sink
        self._state = AlarmState.SILENT
        self._trigger_count = 0

        self._deadline = QTimer(self)
        self._deadline.setSingleShot(True)
        self._deadline.setInterval(max(1, int(auto_stop_seconds * 1000)))
        self._deadline.timeout.connect(self._on_deadline)

    @property
    def state(self) -> AlarmState:
        return self._state

    @property
    def is_sounding(self) -> bool:
        return self._state == AlarmState.SOUNDING

    @property
    def trigger_count(self) -> int:
        """How many times ``trigger()`` has been called (for the UI badge)."""
        return self._trigger_count

    @property
    def auto_stop_ms(self) -> int:
        return self._deadline.interval()

    @property
    def deadline_pending(self) -> bool:
        return self._deadline.isActive()

    def trigger(self) -> None:
        """Ring.  Restarts from the top if already ringing."""
        self._trigger_count += 1
        if self._sink is not None:
            try:
                if self._state == AlarmState.SOUNDING:
                    self._sink.restart_from_beginning()
                else:
                    self._sink.play_looping()
            except Exception:
                log.exception("Alarm playback failed; continuing without sound")
        # start() on an active QTimer restarts it
        self._deadline.start()
        if self._state != AlarmState.SOUNDING:
            log.info("Alarm sounding")
        else:
            log.debug("Alarm re-triggered while sounding")
        self._set_state(AlarmState.SOUNDING)

    def stop(self) -> None:
        """Silence now and cancel the auto-stop deadline."""
        self._deadline.stop()
        if self._state == AlarmState.SILENT:
            return
        if self._sink is not None:
            try:
                self._sink.stop_playing()
            except Exception:
                log.exception("Failed to stop alarm playback")
        log.info("Alarm silenced")
        self._set_state(AlarmState.SILENT)

    def close(self) -> None:
        """Stop and release the audio resource.  Called at shutdown."""
        self.stop()
        if self._sink is not None:
            try:
                self._sink.release()
            except Exception:
                log.exception("Failed to release alarm audio")
            self._sink = None

    def _on_deadline(self) -> None:
        log.debug("Alarm auto-stop deadline reached")
        self.stop()

    def _set_state(self, new_state: AlarmState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        self.state_changed.emit(new_state)
