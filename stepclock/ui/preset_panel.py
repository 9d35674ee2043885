"""Saved presets: save the live sequence, load or delete a saved one."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout, QInputDialog, QLabel, QListWidget, QListWidgetItem,
    QPushButton, QVBoxLayout, QWidget,
)

from ..presets.store import Preset
from ..timer.entry import format_hms


class PresetPanel(QWidget):

    save_requested = pyqtSignal(str)
    load_requested = pyqtSignal(str)
    delete_requested = pyqtSignal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        header = QHBoxLayout()
        title = QLabel("Presets", self)
        title.setObjectName("sectionLabel")
        header.addWidget(title)
        header.addStretch()
        self._save_btn = QPushButton("Save…", self)
        self._load_btn = QPushButton("Load", self)
        self._delete_btn = QPushButton("Delete", self)
        self._delete_btn.setObjectName("dangerButton")
        header.addWidget(self._save_btn)
        header.addWidget(self._load_btn)
        header.addWidget(self._delete_btn)
        layout.addLayout(header)

        self._list = QListWidget(self)
        layout.addWidget(self._list)

        self._save_btn.clicked.connect(self._on_save)
        self._load_btn.clicked.connect(lambda: self._emit_selected(self.load_requested))
        self._delete_btn.clicked.connect(lambda: self._emit_selected(self.delete_requested))
        self._list.itemDoubleClicked.connect(
            lambda item: self.load_requested.emit(item.data(Qt.ItemDataRole.UserRole))
        )

    @property
    def list_widget(self) -> QListWidget:
        return self._list

    def set_presets(self, presets: tuple[Preset, ...]) -> None:
        self._list.clear()
        for preset in presets:
            item = QListWidgetItem(
                f"{preset.name}  ({len(preset.steps)} steps, {format_hms(preset.total_duration)})"
            )
            item.setData(Qt.ItemDataRole.UserRole, preset.id)
            self._list.addItem(item)

    def set_can_save(self, can_save: bool) -> None:
        self._save_btn.setEnabled(can_save)

    def set_can_load(self, can_load: bool) -> None:
        self._load_btn.setEnabled(can_load)

    def _on_save(self) -> None:
        name, ok = QInputDialog.getText(self, "Save Preset", "Preset name:")
        if ok and name.strip():
            self.save_requested.emit(name.strip())

    def _emit_selected(self, signal) -> None:
        item = self._list.currentItem()
        if item is not None:
            signal.emit(item.data(Qt.ItemDataRole.UserRole))
