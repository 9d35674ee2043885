"""Tests for the alarm controller, its sinks, and tone synthesis."""

from __future__ import annotations

import io
import wave

import pytest
from PyQt6.QtTest import QTest

from stepclock.audio.alarm import (
    AlarmController, AlarmPlaybackError, AlarmState, QtAlarmSink,
    SilentAlarmSink, AUTO_STOP_SECONDS,
)
from stepclock.audio.tone import ALARM_FILENAME, ensure_alarm_file, generate_alarm_tone

from helpers import RecordingSink, SignalCollector


# ═══════════════════════════════════════════════════════════════════════
#  CONTROLLER
# ═══════════════════════════════════════════════════════════════════════


class TestAlarmController:

    def test_starts_silent(self, alarm):
        assert alarm.state == AlarmState.SILENT
        assert not alarm.deadline_pending

    def test_default_auto_stop_is_60s(self, alarm):
        assert AUTO_STOP_SECONDS == 60
        assert alarm.auto_stop_ms == 60_000

    def test_trigger_plays_and_arms_deadline(self, alarm, sink):
        alarm.trigger()
        assert alarm.state == AlarmState.SOUNDING
        assert sink.calls == ["play"]
        assert alarm.deadline_pending

    def test_retrigger_restarts_from_beginning(self, alarm, sink):
        alarm.trigger()
        alarm.trigger()
        assert sink.calls == ["play", "restart"]
        assert alarm.state == AlarmState.SOUNDING
        assert alarm.trigger_count == 2

    def test_stop(self, alarm, sink):
        alarm.trigger()
        alarm.stop()
        assert alarm.state == AlarmState.SILENT
        assert sink.calls[-1] == "stop"
        assert not alarm.deadline_pending

    def test_stop_when_silent_is_noop(self, alarm, sink):
        alarm.stop()
        assert sink.calls == []

    def test_trigger_after_stop_plays_fresh(self, alarm, sink):
        alarm.trigger()
        alarm.stop()
        alarm.trigger()
        assert sink.calls == ["play", "stop", "play"]

    def test_state_changed_signal(self, alarm):
        c = SignalCollector()
        alarm.state_changed.connect(c)
        alarm.trigger()
        alarm.trigger()
        alarm.stop()
        assert c.items == [AlarmState.SOUNDING, AlarmState.SILENT]

    def test_deadline_stops_like_explicit_stop(self, qapp):
        sink = RecordingSink()
        alarm = AlarmController(sink, auto_stop_seconds=0.05)
        alarm.trigger()
        QTest.qWait(300)
        assert alarm.state == AlarmState.SILENT
        assert sink.calls == ["play", "stop"]
        assert not alarm.deadline_pending

    def test_retrigger_rearms_deadline(self, qapp):
        sink = RecordingSink()
        alarm = AlarmController(sink, auto_stop_seconds=0.2)
        alarm.trigger()
        QTest.qWait(120)
        alarm.trigger()
        QTest.qWait(120)
        # 240 ms after the first trigger but only 120 ms after the second
        assert alarm.state == AlarmState.SOUNDING
        QTest.qWait(300)
        assert alarm.state == AlarmState.SILENT

    def test_playback_failure_is_swallowed(self, qapp):
        sink = RecordingSink(fail=True)
        alarm = AlarmController(sink)
        alarm.trigger()
        assert alarm.state == AlarmState.SOUNDING
        alarm.trigger()
        alarm.stop()
        assert alarm.state == AlarmState.SILENT

    def test_close_releases_sink(self, alarm, sink):
        alarm.trigger()
        alarm.close()
        assert sink.calls[-2:] == ["stop", "release"]
        # further use is harmless
        alarm.trigger()
        alarm.stop()
        assert sink.calls.count("release") == 1

    def test_silent_sink_is_a_valid_sink(self, qapp):
        alarm = AlarmController(SilentAlarmSink())
        alarm.trigger()
        alarm.trigger()
        alarm.stop()
        alarm.close()
        assert alarm.state == AlarmState.SILENT


# ═══════════════════════════════════════════════════════════════════════
#  TONE SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════


class TestAlarmTone:

    def test_generates_wav(self):
        data = generate_alarm_tone()
        assert data[:4] == b"RIFF"
        with wave.open(io.BytesIO(data), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 44100
            assert wf.getnframes() > 0

    def test_ensure_writes_once(self, tmp_path):
        path = ensure_alarm_file(tmp_path)
        assert path == tmp_path / ALARM_FILENAME
        assert path.stat().st_size > 100
        path.write_bytes(b"cached")
        ensure_alarm_file(tmp_path)
        assert path.read_bytes() == b"cached"


@pytest.mark.usefixtures("qapp")
class TestQtAlarmSink:

    def test_create_generates_file(self, tmp_path):
        sink = QtAlarmSink(sounds_dir=tmp_path)
        assert sink.path.exists()
        sink.release()

    def test_volume(self, tmp_path):
        sink = QtAlarmSink(sounds_dir=tmp_path, volume=40)
        assert sink.volume == 40
        sink.set_volume(250)
        assert sink.volume == 100
        sink.release()

    def test_play_after_release_raises(self, tmp_path):
        sink = QtAlarmSink(sounds_dir=tmp_path)
        sink.release()
        with pytest.raises(AlarmPlaybackError):
            sink.play_looping()

    def test_release_is_idempotent(self, tmp_path):
        sink = QtAlarmSink(sounds_dir=tmp_path)
        sink.release()
        sink.release()
        sink.stop_playing()
