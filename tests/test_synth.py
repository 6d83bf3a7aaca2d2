import numpy as np
import pytest

from codesymphony.symphony import build_chord
from codesymphony.synth import (
    apply_adsr,
    arpeggio_order,
    generate_sine,
    render_arpeggio,
    render_chord,
    render_progression,
)

SR = 8_000


def test_render_chord_shape_and_peak() -> None:
    audio = render_chord(build_chord([0.05, 0.5, 5.0]), duration=0.5, sample_rate=SR)
    assert audio.dtype == np.float32
    assert audio.shape == (SR // 2,)
    assert float(np.max(np.abs(audio))) <= 1.0
    assert float(np.max(np.abs(audio))) > 0.1


def test_empty_chord_renders_silence() -> None:
    audio = render_chord(build_chord([]), duration=0.25, sample_rate=SR)
    assert audio.shape == (SR // 4,)
    assert not audio.any()


def test_adsr_fits_short_notes() -> None:
    signal = np.ones(100, dtype=np.float64)
    shaped = apply_adsr(signal, sr=SR)
    assert shaped.shape == signal.shape
    assert shaped[0] == 0.0
    assert float(shaped.max()) <= 1.0


def test_generate_sine_length() -> None:
    assert generate_sine(432.0, 0.1, sr=SR).shape == (800,)


def test_arpeggio_orders() -> None:
    chord = build_chord([5.0, 0.05, 0.5])
    low, mid, high = sorted(chord.frequencies)
    assert arpeggio_order(chord, "up") == [low, mid, high]
    assert arpeggio_order(chord, "down") == [high, mid, low]
    shuffled = arpeggio_order(chord, "random", rng=np.random.default_rng(7))
    assert sorted(shuffled) == [low, mid, high]
    assert shuffled == arpeggio_order(chord, "random", rng=np.random.default_rng(7))
    with pytest.raises(ValueError):
        arpeggio_order(chord, "sideways")  # type: ignore[arg-type]


def test_render_arpeggio_length() -> None:
    chord = build_chord([0.05, 0.5, 5.0])
    audio = render_arpeggio(chord, note_duration=0.1, sample_rate=SR)
    assert audio.shape == (3 * 800,)


def test_render_progression_one_beat_per_chord() -> None:
    chords = [build_chord([2.0]), build_chord([]), build_chord([0.5, 5.0])]
    audio = render_progression(chords, tempo=120.0, sample_rate=SR)
    assert audio.shape == (3 * SR // 2,)
    with pytest.raises(ValueError):
        render_progression(chords, tempo=0.0)
