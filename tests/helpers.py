"""Shared test helpers for StepClock."""

from stepclock.timer.engine import CountdownEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class RecordingSink:
    """Audio sink that records calls instead of making noise."""

    def __init__(self, fail: bool = False):
        self.calls: list[str] = []
        self.fail = fail

    def play_looping(self):
        self.calls.append("play")
        if self.fail:
            raise RuntimeError("no audio device")

    def stop_playing(self):
        self.calls.append("stop")

    def restart_from_beginning(self):
        self.calls.append("restart")
        if self.fail:
            raise RuntimeError("no audio device")

    def release(self):
        self.calls.append("release")


def set_entry(engine: CountdownEngine, hours: int = 0, minutes: int = 0, seconds: int = 0) -> None:
    """Spin the time entry to h:m:s (engine must be IDLE)."""
    entry = engine.entry
    entry.clear()
    for field, target in (("hours", hours), ("minutes", minutes), ("seconds", seconds)):
        for _ in range(target):
            entry.adjust(field, 1)


def run_ticks(engine: CountdownEngine, n: int) -> list[tuple[int, int]]:
    """Tick *n* times; return (remaining_overall, remaining_step) after each."""
    seen = []
    for _ in range(n):
        engine.tick()
        seen.append((engine.remaining_overall, engine.remaining_step))
    return seen
