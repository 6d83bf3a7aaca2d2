from __future__ import annotations

import math
from collections.abc import Iterable

from .config import DEFAULT_CONFIG, SEMITONES_PER_OCTAVE, HarmonyConfig
from .errors import InvalidFrequencyError
from .frequency import round_half_up

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")


def frequency_to_midi(frequency: float, config: HarmonyConfig = DEFAULT_CONFIG) -> int:
    """Nearest MIDI number, with ``config.base_frequency`` standing in for A4.

    The default 432 Hz reference moves MIDI 69 off concert 440 Hz.
    """

    if not math.isfinite(frequency) or frequency <= 0.0:
        raise InvalidFrequencyError(f"Frequency must be finite and > 0, got {frequency!r}")
    semitones = SEMITONES_PER_OCTAVE * math.log2(frequency / config.base_frequency)
    return round_half_up(config.reference_midi + semitones)


def midi_to_note_name(midi: int) -> str:
    # Floor division/modulo keep negative MIDI numbers on the table.
    octave, index = divmod(midi, SEMITONES_PER_OCTAVE)
    return f"{NOTE_NAMES[index]}{octave - 1}"


def name_frequencies(
    frequencies: Iterable[float], config: HarmonyConfig = DEFAULT_CONFIG
) -> tuple[tuple[int, ...], tuple[str, ...]]:
    midi_numbers = tuple(frequency_to_midi(freq, config) for freq in frequencies)
    notes = tuple(midi_to_note_name(midi) for midi in midi_numbers)
    return midi_numbers, notes
