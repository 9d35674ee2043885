"""Durable preset storage.

The whole preset collection is one JSON document stored under a single
well-known key.  Every save rewrites the full collection.  Anything that
goes wrong on the way in (database error, bad JSON, malformed records)
yields an empty collection; the timer must keep working regardless.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError

from ..database.db import read_value, write_value
from ..logger import log
from ..timer.steps import TimerStep, copy_steps, new_id


PRESETS_KEY = "timer-presets"


@dataclass(frozen=True)
class Preset:
    id: str
    name: str
    steps: tuple[TimerStep, ...] = field(default_factory=tuple)

    @classmethod
    def snapshot(cls, name: str, steps) -> "Preset":
        """A new preset holding independent copies of *steps*."""
        return cls(id=new_id(), name=name, steps=copy_steps(steps))

    @property
    def total_duration(self) -> int:
        return sum(step.duration for step in self.steps)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "steps": [step.to_dict() for step in self.steps],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Preset":
        steps = tuple(TimerStep.from_dict(s) for s in data["steps"])
        if not steps:
            raise ValueError(f"preset {data['id']!r} has no steps")
        return cls(id=str(data["id"]), name=str(data["name"]), steps=steps)


def encode_presets(presets) -> str:
    return json.dumps([preset.to_dict() for preset in presets])


def decode_presets(raw: str) -> list[Preset]:
    """Parse a stored collection.  Raises ValueError on any malformed data."""
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a list of presets, got {type(data).__name__}")
    try:
        return [Preset.from_dict(item) for item in data]
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"malformed preset record: {exc!r}") from exc


class PresetStore:
    """``load_all`` / ``save_all`` over the key/value table."""

    def __init__(self, key: str = PRESETS_KEY) -> None:
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load_all(self) -> list[Preset]:
        try:
            raw = read_value(self._key)
        except SQLAlchemyError:
            log.exception("Could not read presets; starting with none")
            return []
        if not raw:
            return []
        try:
            presets = decode_presets(raw)
        except ValueError as exc:
            log.warning(f"Stored presets are unreadable, ignoring them: {exc}")
            return []
        log.info(f"Loaded {len(presets)} presets")
        return presets

    def save_all(self, presets) -> bool:
        """Overwrite the stored collection.  Returns False on failure."""
        try:
            write_value(self._key, encode_presets(presets))
        except SQLAlchemyError:
            log.exception("Could not save presets")
            return False
        log.debug(f"Saved {len(presets)} presets")
        return True
