"""Step list panel: the live sequence with remove / clear controls."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QHBoxLayout, QLabel, QListWidget, QListWidgetItem, QPushButton,
    QVBoxLayout, QWidget,
)

from ..timer.entry import format_hms
from ..timer.steps import TimerStep


class StepListWidget(QWidget):
    """Shows steps in execution order; highlights the active one."""

    remove_requested = pyqtSignal(str)
    clear_requested = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        header = QHBoxLayout()
        self._title = QLabel("Steps", self)
        self._title.setObjectName("sectionLabel")
        header.addWidget(self._title)
        header.addStretch()
        self._remove_btn = QPushButton("Remove", self)
        self._clear_btn = QPushButton("Clear steps", self)
        self._clear_btn.setObjectName("dangerButton")
        header.addWidget(self._remove_btn)
        header.addWidget(self._clear_btn)
        layout.addLayout(header)

        self._list = QListWidget(self)
        layout.addWidget(self._list)

        self._remove_btn.clicked.connect(self._on_remove)
        self._clear_btn.clicked.connect(self.clear_requested.emit)

    @property
    def list_widget(self) -> QListWidget:
        return self._list

    def set_steps(self, steps: tuple[TimerStep, ...], total: int) -> None:
        self._list.clear()
        for i, step in enumerate(steps, start=1):
            item = QListWidgetItem(f"{i}. {step.name}  ·  {format_hms(step.duration)}")
            item.setData(Qt.ItemDataRole.UserRole, step.id)
            self._list.addItem(item)
        if steps:
            self._title.setText(f"Steps ({len(steps)}, total {format_hms(total)})")
        else:
            self._title.setText("Steps")

    def set_active(self, step_id: str | None) -> None:
        for row in range(self._list.count()):
            item = self._list.item(row)
            font = QFont(item.font())
            font.setBold(item.data(Qt.ItemDataRole.UserRole) == step_id)
            item.setFont(font)

    def set_editable(self, editable: bool) -> None:
        self._remove_btn.setEnabled(editable)
        self._clear_btn.setEnabled(editable)

    def _on_remove(self) -> None:
        item = self._list.currentItem()
        if item is not None:
            self.remove_requested.emit(item.data(Qt.ItemDataRole.UserRole))
