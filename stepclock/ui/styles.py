"""QSS stylesheet and status colours for StepClock."""

from __future__ import annotations

from ..timer.engine import TimerStatus

# ── status colours for the countdown digits ──────────────────────────────

STATUS_COLORS: dict[TimerStatus, str] = {
    TimerStatus.IDLE:    "#7A7A9A",   # muted
    TimerStatus.RUNNING: "#89B4FA",   # blue
    TimerStatus.PAUSED:  "#6C7086",   # desaturated gray
}

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "accent":       "#89B4FA",
    "accent2":      "#74A0F0",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "danger":       "#F38BA8",
    "warning":      "#F9E2AF",
    "border":       "#313154",
}


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QLineEdit, QListWidget {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 18px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton:disabled {{
        color: {p['text_muted']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 12px 36px;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#dangerButton {{
        background-color: transparent;
        color: {p['danger']};
    }}

    QPushButton#alarmButton {{
        background-color: {p['warning']};
        color: {p['bg']};
        border: none;
    }}

    QLabel#countdown {{
        font-size: 64px;
        font-weight: 700;
    }}

    QLabel#stepLabel, QLabel#sectionLabel {{
        color: {p['text_muted']};
    }}
    """
