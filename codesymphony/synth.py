from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import lru_cache
from typing import Literal

import numpy as np
from numpy.typing import NDArray
from scipy.signal import butter, lfilter  # type: ignore[import]

from .audio import SAMPLE_RATE, FloatArray, ensure_audio_contract, silence
from .models import SoulChord

_LOGGER = logging.getLogger("codesymphony.synth")

ArpeggioPattern = Literal["up", "down", "random"]

# Pure sine voices with a soft envelope and a touch of room.
ATTACK = 0.02
DECAY = 0.1
SUSTAIN = 0.3
RELEASE = 1.0
REVERB_WET = 0.3
REVERB_SIZE = 2.5
REVERB_TAPS = (0.029, 0.037, 0.041, 0.053, 0.067)
LOWPASS_HZ = 6_000.0
DEFAULT_TEMPO = 120.0
SIXTEENTH_AT_DEFAULT_TEMPO = 60.0 / DEFAULT_TEMPO / 4.0


def generate_sine(
    freq: float, duration: float, sr: int = SAMPLE_RATE, amp: float = 0.3
) -> NDArray[np.float64]:
    """One sine partial, ``duration`` seconds long."""
    t = np.linspace(0, duration, int(sr * duration), False)
    return amp * np.sin(2 * np.pi * freq * t)


def apply_adsr(
    signal: NDArray[np.float64],
    attack: float = ATTACK,
    decay: float = DECAY,
    sustain: float = SUSTAIN,
    release: float = RELEASE,
    sr: int = SAMPLE_RATE,
) -> NDArray[np.float64]:
    """Apply ADSR envelope to signal, squeezing the stages into short notes."""
    total = len(signal)
    if total == 0:
        return signal
    a_samples = min(int(max(attack, 0.005) * sr), total)
    d_samples = min(int(decay * sr), total - a_samples)
    r_samples = min(int(max(release, 0.01) * sr), total - a_samples - d_samples)
    s_samples = total - a_samples - d_samples - r_samples

    envelope = np.concatenate(
        (
            np.linspace(0.0, 1.0, a_samples, endpoint=False),
            np.linspace(1.0, sustain, d_samples, endpoint=False),
            np.full(s_samples, sustain),
            np.linspace(sustain, 0.0, r_samples),
        )
    )
    return signal * envelope


@lru_cache(maxsize=32)
def _butter_cached(
    kind: str, normalized_cutoff: float
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    coeffs = butter(2, normalized_cutoff, btype=kind, output="ba")
    assert isinstance(coeffs, tuple)
    b_raw, a_raw = coeffs
    return np.asarray(b_raw, dtype=np.float64), np.asarray(a_raw, dtype=np.float64)


def apply_lowpass(
    signal: NDArray[np.float64], cutoff: float, sr: int = SAMPLE_RATE
) -> NDArray[np.float64]:
    """Second-order Butterworth lowpass; the cutoff is clamped below Nyquist."""
    nyquist = sr / 2
    normalized = min(max(cutoff / nyquist, 0.001), 0.99)
    b, a = _butter_cached("low", round(normalized, 4))
    return np.asarray(lfilter(b, a, signal), dtype=np.float64)


def apply_reverb(
    signal: NDArray[np.float64],
    room: float = REVERB_WET,
    size: float = REVERB_SIZE,
    sr: int = SAMPLE_RATE,
) -> NDArray[np.float64]:
    """Feed-forward echoes at ``REVERB_TAPS``, each quieter than the last."""
    output = signal.copy()
    for i, delay in enumerate(REVERB_TAPS):
        delay_samples = int(delay * size * sr)
        if 0 < delay_samples < len(signal):
            output[delay_samples:] += signal[:-delay_samples] * room * (0.7**i)
    return output


def _voice(frequencies: Sequence[float], duration: float, sr: int) -> NDArray[np.float64]:
    mix = np.zeros(int(sr * duration), dtype=np.float64)
    for freq in frequencies:
        mix += generate_sine(freq, duration, sr=sr)
    return apply_adsr(mix, sr=sr)


def _finish(mix: NDArray[np.float64], sr: int) -> FloatArray:
    wet = apply_reverb(apply_lowpass(mix, LOWPASS_HZ, sr=sr), sr=sr)
    peak = float(np.max(np.abs(wet))) if wet.size else 0.0
    if peak > 0.0:
        wet = wet * (0.9 / peak)
    return ensure_audio_contract(wet)


def render_chord(
    chord: SoulChord, duration: float = 2.0, *, sample_rate: int = SAMPLE_RATE
) -> FloatArray:
    """All of the chord's frequencies at once."""

    if not chord.frequencies:
        return silence(duration, sample_rate=sample_rate)
    return _finish(_voice(chord.frequencies, duration, sample_rate), sample_rate)


def arpeggio_order(
    chord: SoulChord,
    pattern: ArpeggioPattern = "up",
    *,
    rng: np.random.Generator | None = None,
) -> list[float]:
    frequencies = list(chord.frequencies)
    if pattern == "up":
        return sorted(frequencies)
    if pattern == "down":
        return sorted(frequencies, reverse=True)
    if pattern == "random":
        generator = rng if rng is not None else np.random.default_rng()
        return [frequencies[i] for i in generator.permutation(len(frequencies))]
    raise ValueError(f"Unknown arpeggio pattern: {pattern!r}")


def render_arpeggio(
    chord: SoulChord,
    pattern: ArpeggioPattern = "up",
    *,
    note_duration: float = SIXTEENTH_AT_DEFAULT_TEMPO,
    sample_rate: int = SAMPLE_RATE,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    """One note per frequency, in sequence."""

    order = arpeggio_order(chord, pattern, rng=rng)
    if not order:
        return silence(note_duration, sample_rate=sample_rate)
    parts = [_voice([freq], note_duration, sample_rate) for freq in order]
    return _finish(np.concatenate(parts), sample_rate)


def render_progression(
    chords: Sequence[SoulChord],
    *,
    tempo: float = DEFAULT_TEMPO,
    sample_rate: int = SAMPLE_RATE,
) -> FloatArray:
    """A flat sequence of chords, one quarter note each."""

    if tempo <= 0:
        raise ValueError("tempo must be positive")
    beat = 60.0 / tempo
    if not chords:
        return silence(beat, sample_rate=sample_rate)
    parts = [
        _voice(chord.frequencies, beat, sample_rate)
        if chord.frequencies
        else np.zeros(int(sample_rate * beat), dtype=np.float64)
        for chord in chords
    ]
    _LOGGER.debug("Rendering %d chords at %.1f bpm", len(chords), tempo)
    return _finish(np.concatenate(parts), sample_rate)
