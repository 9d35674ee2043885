"""In-memory preset collection tied to the live engine."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from ..logger import log
from ..timer.engine import CountdownEngine, TimerStatus
from .store import Preset, PresetStore


class PresetLibrary(QObject):
    """Saves the live step list as presets and loads presets back into it.

    Signals
    -------
    presets_changed()
        Emitted after every add, delete, or initial load.
    """

    presets_changed = pyqtSignal()

    def __init__(
        self,
        engine: CountdownEngine,
        store: PresetStore,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._store = store
        self._presets: list[Preset] = []

    @property
    def presets(self) -> tuple[Preset, ...]:
        return tuple(self._presets)

    def get(self, preset_id: str) -> Preset | None:
        for preset in self._presets:
            if preset.id == preset_id:
                return preset
        return None

    def load(self) -> None:
        """Read the stored collection.  Called once at startup."""
        self._presets = list(self._store.load_all())
        self.presets_changed.emit()

    def save_current(self, name: str) -> Preset | None:
        """Snapshot the live step list under *name*.

        Refused when the step list is empty or the name is blank.
        """
        name = (name or "").strip()
        if not name or len(self._engine.steps) == 0:
            log.debug("save_current() ignored: blank name or no steps")
            return None
        preset = Preset.snapshot(name, self._engine.steps)
        self._presets.append(preset)
        self._store.save_all(self._presets)
        log.info(f"Saved preset '{name}' ({len(preset.steps)} steps)")
        self.presets_changed.emit()
        return preset

    def delete(self, preset_id: str) -> bool:
        preset = self.get(preset_id)
        if preset is None:
            return False
        self._presets.remove(preset)
        self._store.save_all(self._presets)
        log.info(f"Deleted preset '{preset.name}'")
        self.presets_changed.emit()
        return True

    def apply(self, preset_id: str) -> bool:
        """Replace the live step list with a copy of the preset's steps."""
        preset = self.get(preset_id)
        if preset is None:
            return False
        if self._engine.status == TimerStatus.RUNNING:
            log.debug("apply() ignored while running")
            return False
        if not self._engine.load_steps(preset.steps):
            return False
        log.info(f"Loaded preset '{preset.name}'")
        return True
