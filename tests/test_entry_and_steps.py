"""Tests for the time entry model and the step sequence."""

import pytest

from stepclock.timer.entry import TimeEntryModel, TimeField, format_hms
from stepclock.timer.steps import StepSequence, TimerStep


# ═══════════════════════════════════════════════════════════════════════════
#  TIME ENTRY
# ═══════════════════════════════════════════════════════════════════════════


class TestTimeEntry:

    def test_defaults_to_zero(self):
        entry = TimeEntryModel()
        assert (entry.hours, entry.minutes, entry.seconds) == (0, 0, 0)
        assert entry.to_duration_seconds() == 0

    def test_duration_seconds(self):
        entry = TimeEntryModel(1, 2, 3)
        assert entry.to_duration_seconds() == 3723

    @pytest.mark.parametrize("field,maximum", [
        (TimeField.HOURS, 23),
        (TimeField.MINUTES, 59),
        (TimeField.SECONDS, 59),
    ])
    def test_decrement_from_zero_wraps_to_max(self, field, maximum):
        entry = TimeEntryModel()
        entry.adjust(field, -1)
        assert entry.value(field) == maximum

    @pytest.mark.parametrize("field", list(TimeField))
    def test_increment_past_max_wraps_to_zero(self, field):
        entry = TimeEntryModel()
        for _ in range(field.maximum):
            entry.adjust(field, 1)
        assert entry.value(field) == field.maximum
        entry.adjust(field, 1)
        assert entry.value(field) == 0

    @pytest.mark.parametrize("field", list(TimeField))
    def test_plus_then_minus_is_identity(self, field):
        for start in range(field.maximum + 1):
            entry = TimeEntryModel()
            for _ in range(start):
                entry.adjust(field, 1)
            entry.adjust(field, 1)
            entry.adjust(field, -1)
            assert entry.value(field) == start

    @pytest.mark.parametrize("field", list(TimeField))
    def test_full_cycle_returns_to_start(self, field):
        entry = TimeEntryModel(hours=5, minutes=17, seconds=42)
        before = entry.value(field)
        for _ in range(field.maximum + 1):
            entry.adjust(field, 1)
        assert entry.value(field) == before

    def test_fields_are_independent(self):
        entry = TimeEntryModel()
        entry.adjust("minutes", -1)
        assert entry.hours == 0
        assert entry.seconds == 0

    def test_accepts_string_field_names(self):
        entry = TimeEntryModel()
        entry.adjust("hours", 1)
        assert entry.hours == 1

    def test_locked_adjust_is_noop(self):
        entry = TimeEntryModel(seconds=5, locked=lambda: True)
        assert entry.adjust(TimeField.SECONDS, 1) is False
        assert entry.seconds == 5

    @pytest.mark.parametrize("delta", [0, 2, -2, 60])
    def test_only_single_steps_accepted(self, delta):
        calls = []
        entry = TimeEntryModel(seconds=5, on_change=lambda: calls.append(1))
        assert entry.adjust(TimeField.SECONDS, delta) is False
        assert entry.seconds == 5
        assert calls == []

    def test_on_change_called(self):
        calls = []
        entry = TimeEntryModel(on_change=lambda: calls.append(1))
        entry.adjust(TimeField.SECONDS, 1)
        entry.adjust(TimeField.SECONDS, -1)
        assert len(calls) == 2

    def test_clear(self):
        entry = TimeEntryModel(1, 2, 3)
        assert entry.clear() is True
        assert entry.to_duration_seconds() == 0

    def test_clear_when_already_zero_does_not_notify(self):
        calls = []
        entry = TimeEntryModel(on_change=lambda: calls.append(1))
        entry.clear()
        assert calls == []


class TestFormatHms:

    @pytest.mark.parametrize("seconds,text", [
        (0, "00:00:00"),
        (5, "00:00:05"),
        (65, "00:01:05"),
        (3725, "01:02:05"),
        (86399, "23:59:59"),
        (-3, "00:00:00"),
    ])
    def test_format(self, seconds, text):
        assert format_hms(seconds) == text


# ═══════════════════════════════════════════════════════════════════════════
#  STEP SEQUENCE
# ═══════════════════════════════════════════════════════════════════════════


class TestStepSequence:

    def test_empty_total_is_zero(self):
        assert StepSequence().total_duration() == 0

    def test_append_and_total(self):
        seq = StepSequence()
        seq.append("A", 30)
        seq.append("B", 45)
        assert seq.total_duration() == 75
        assert [s.name for s in seq] == ["A", "B"]

    @pytest.mark.parametrize("duration", [0, -1, -60])
    def test_non_positive_duration_ignored(self, duration):
        seq = StepSequence()
        assert seq.append("Bad", duration) is None
        assert len(seq) == 0

    def test_default_names(self):
        seq = StepSequence()
        seq.append("", 10)
        seq.append("   ", 10)
        seq.append("Named", 10)
        seq.append("", 10)
        assert [s.name for s in seq] == ["Step 1", "Step 2", "Named", "Step 4"]

    def test_ids_are_unique(self):
        seq = StepSequence()
        ids = {seq.append("", 1).id for _ in range(50)}
        assert len(ids) == 50

    def test_remove(self):
        seq = StepSequence()
        a = seq.append("A", 1)
        b = seq.append("B", 2)
        assert seq.remove(a.id) is True
        assert seq.steps == (b,)

    def test_remove_unknown_is_noop(self):
        calls = []
        seq = StepSequence(on_change=lambda: calls.append(1))
        seq.append("A", 1)
        calls.clear()
        assert seq.remove("missing") is False
        assert len(seq) == 1
        assert calls == []

    def test_locked_sequence_refuses_edits(self):
        seq = StepSequence([TimerStep("x", "X", 5)], locked=lambda: True)
        assert seq.append("A", 1) is None
        assert seq.remove("x") is False
        assert seq.clear() is False
        assert seq.replace([]) is False
        assert len(seq) == 1

    def test_replace_copies_steps(self):
        source = [TimerStep("a", "A", 1), TimerStep("b", "B", 2)]
        seq = StepSequence()
        seq.replace(source)
        source.append(TimerStep("c", "C", 3))
        assert len(seq) == 2
        assert seq.total_duration() == 3

    def test_snapshot_is_independent(self):
        seq = StepSequence()
        seq.append("A", 1)
        snap = seq.snapshot()
        seq.append("B", 2)
        assert len(snap) == 1

    def test_steps_are_immutable(self):
        step = TimerStep("a", "A", 1)
        with pytest.raises(AttributeError):
            step.duration = 5

    def test_step_dict_round_trip_rejects_zero(self):
        with pytest.raises(ValueError):
            TimerStep.from_dict({"id": "a", "name": "A", "duration": 0})

    def test_numeric_ids_are_accepted(self):
        step = TimerStep.from_dict({"id": 1718000000000, "name": "A", "duration": 3})
        assert step.id == "1718000000000"
