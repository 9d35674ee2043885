"""Preset package."""

from .library import PresetLibrary
from .store import Preset, PresetStore, PRESETS_KEY, decode_presets, encode_presets

__all__ = [
    "PresetLibrary",
    "Preset",
    "PresetStore",
    "PRESETS_KEY",
    "decode_presets",
    "encode_presets",
]
