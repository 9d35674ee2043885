"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/StepClock/settings.json

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .logger import log


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "StepClock"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    tick_interval_ms: int = 1000

    # ── alarm ─────────────────────────────────────────────────────────
    alarm_auto_stop_seconds: int = 60
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_to_console: bool = False

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 560
    window_height: int = 760


def _check_types(data: dict) -> None:
    """Raise TypeError if a value does not match its default's type.

    Fields that default to None (window position) take an int or None.
    """
    defaults = Settings()
    for key, value in data.items():
        default = getattr(defaults, key)
        expected = int if default is None else type(default)
        if value is None and default is None:
            continue
        # bool is an int subclass; neither may stand in for the other
        if type(value) is not expected:
            raise TypeError(
                f"setting '{key}' should be {expected.__name__}, got {type(value).__name__}"
            )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            _check_types(filtered)
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        log.warning(f"Could not read settings from '{SETTINGS_PATH}', using defaults: {exc}")
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
