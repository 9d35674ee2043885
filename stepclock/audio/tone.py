"""Alarm tone synthesis using numpy.

The alarm is generated programmatically as a WAV file: three short sine
bursts with ADSR envelopes followed by a pause, so it loops cleanly.  The
file is cached to disk so subsequent launches skip synthesis.
"""

from __future__ import annotations

import io
import wave
from pathlib import Path

import numpy as np


SOUNDS_DIR = Path.home() / "Library" / "Application Support" / "StepClock" / "sounds"
ALARM_FILENAME = "alarm.wav"

SAMPLE_RATE = 44100


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    # Attack
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    # Decay
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    # Sustain
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    # Release
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_alarm_tone(
    freq: float = 880.0,
    beeps: int = 3,
    beep_s: float = 0.14,
    gap_s: float = 0.08,
    tail_s: float = 0.5,
) -> bytes:
    """Alarm: *beeps* bright bursts (A5 by default) then silence."""
    parts: list[np.ndarray] = []
    for _ in range(beeps):
        tone = _sine(freq, beep_s) * 0.55 + _sine(freq * 2, beep_s) * 0.1
        env = _make_envelope(len(tone), attack=80, decay=300, sustain_level=0.6, release=600)
        parts.append(tone * env)
        parts.append(np.zeros(int(SAMPLE_RATE * gap_s)))
    parts.append(np.zeros(int(SAMPLE_RATE * tail_s)))
    return _to_wav_bytes(np.concatenate(parts))


def ensure_alarm_file(sounds_dir: Path | None = None) -> Path:
    """Write the alarm WAV to the cache directory if it is missing."""
    sounds_dir = sounds_dir or SOUNDS_DIR
    sounds_dir.mkdir(parents=True, exist_ok=True)
    path = sounds_dir / ALARM_FILENAME
    if not path.exists():
        path.write_bytes(generate_alarm_tone())
    return path
