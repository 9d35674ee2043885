"""One spinnable two-digit field (hours, minutes or seconds).

Shows the previous, current and next values like a drum; the mouse wheel
or the arrow buttons emit ``adjusted(delta)``.  The model owns the value
and the owner calls ``set_value`` after the model changes.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QWheelEvent
from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget


class TimeUnit(QWidget):

    adjusted = pyqtSignal(int)

    def __init__(self, label: str, maximum: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._maximum = maximum
        self._value = 0

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 0, 4, 0)
        layout.setSpacing(2)

        title = QLabel(label, self)
        title.setObjectName("sectionLabel")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        self._up_btn = QPushButton("▲", self)
        self._prev_lbl = QLabel(self)
        self._value_lbl = QLabel(self)
        self._next_lbl = QLabel(self)
        self._down_btn = QPushButton("▼", self)

        for lbl in (self._prev_lbl, self._value_lbl, self._next_lbl):
            lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._prev_lbl.setStyleSheet("color: #6C7086; font-size: 20px;")
        self._next_lbl.setStyleSheet("color: #6C7086; font-size: 20px;")
        self._value_lbl.setStyleSheet("font-size: 36px; font-weight: 700;")

        layout.addWidget(self._up_btn)
        layout.addWidget(self._prev_lbl)
        layout.addWidget(self._value_lbl)
        layout.addWidget(self._next_lbl)
        layout.addWidget(self._down_btn)

        self._up_btn.clicked.connect(lambda: self.adjusted.emit(1))
        self._down_btn.clicked.connect(lambda: self.adjusted.emit(-1))

        self.set_value(0)

    @property
    def value(self) -> int:
        return self._value

    def set_value(self, value: int) -> None:
        self._value = value
        prev_value = self._maximum if value == 0 else value - 1
        next_value = 0 if value == self._maximum else value + 1
        self._prev_lbl.setText(f"{prev_value:02d}")
        self._value_lbl.setText(f"{value:02d}")
        self._next_lbl.setText(f"{next_value:02d}")

    def set_editable(self, editable: bool) -> None:
        self._up_btn.setEnabled(editable)
        self._down_btn.setEnabled(editable)

    def wheelEvent(self, event: QWheelEvent) -> None:
        dy = event.angleDelta().y()
        if dy:
            self.adjusted.emit(1 if dy > 0 else -1)
        event.accept()
