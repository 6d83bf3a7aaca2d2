from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import mido
from mido import Message, MetaMessage, MidiFile, MidiTrack

from .frequency import round_half_up
from .models import Quality, SoulChord

_LOGGER = logging.getLogger("codesymphony.midi")

TEMPO_BPM = 108  # 432 / 4
TICKS_PER_BEAT = 480
WHOLE = TICKS_PER_BEAT * 4
HALF = TICKS_PER_BEAT * 2
QUARTER = TICKS_PER_BEAT
EIGHTH = TICKS_PER_BEAT // 2

PIANO = 0
DISTORTION_ORGAN = 18
STRINGS = 48

SEPARATOR_NOTE = 60
RESOLUTION_CHORD = (60, 64, 67, 72)

QUALITY_VELOCITY: Mapping[Quality, int] = MappingProxyType(
    {
        "consonant": 80,
        "dissonant": 100,
        "neutral": 90,
    }
)


def playable_notes(midi_numbers: Iterable[int]) -> list[int]:
    notes: list[int] = []
    for note in midi_numbers:
        if 0 <= note <= 127:
            notes.append(note)
        else:
            _LOGGER.warning("Skipping MIDI note %d outside 0..127", note)
    return notes


def tension_velocity(tension: float) -> int:
    return round_half_up(50 + (1.0 - tension) * 50)


class _TrackWriter:
    """Appends events while tracking the delta time owed to the next one."""

    def __init__(self, program: int = PIANO) -> None:
        self.track = MidiTrack()
        self._pending = 0
        self.track.append(MetaMessage("set_tempo", tempo=mido.bpm2tempo(TEMPO_BPM), time=0))
        self.program(program)

    def _take(self) -> int:
        delta, self._pending = self._pending, 0
        return delta

    def rest(self, ticks: int) -> None:
        self._pending += ticks

    def program(self, program: int) -> None:
        self.track.append(Message("program_change", program=program, time=self._take()))

    def text(self, text: str) -> None:
        self.track.append(MetaMessage("text", text=text, time=self._take()))

    def chord(self, midi_numbers: Sequence[int], *, duration: int, velocity: int) -> None:
        notes = playable_notes(midi_numbers)
        if not notes:
            self.rest(duration)
            return
        for note in notes:
            self.track.append(
                Message("note_on", note=note, velocity=velocity, time=self._take())
            )
        for index, note in enumerate(notes):
            self.track.append(
                Message("note_off", note=note, velocity=0, time=duration if index == 0 else 0)
            )

    def save(self, path: str | Path) -> Path:
        target = Path(path)
        midi_file = MidiFile(type=0, ticks_per_beat=TICKS_PER_BEAT)
        midi_file.tracks.append(self.track)
        midi_file.save(str(target))
        _LOGGER.info("Wrote MIDI to %s", target)
        return target


def chord_to_midi(chord: SoulChord, path: str | Path) -> Path:
    writer = _TrackWriter()
    writer.chord(chord.midi_numbers, duration=HALF, velocity=QUALITY_VELOCITY[chord.quality])
    writer.text(f"Quality: {chord.quality}")
    writer.text(f"Tension: {chord.tension:.3f}")
    writer.text(f"Notes: {', '.join(chord.notes)}")
    return writer.save(path)


def comparison_to_midi(first: SoulChord, second: SoulChord, path: str | Path) -> Path:
    writer = _TrackWriter()
    writer.text("Original Code")
    writer.chord(first.midi_numbers, duration=HALF, velocity=80)
    writer.rest(HALF)
    writer.chord([SEPARATOR_NOTE], duration=EIGHTH, velocity=40)
    writer.text("Refactored Code")
    writer.rest(EIGHTH)
    writer.chord(second.midi_numbers, duration=HALF, velocity=80)
    return writer.save(path)


def evolution_to_midi(chords: Sequence[SoulChord], path: str | Path) -> Path:
    writer = _TrackWriter()
    writer.text("Code Evolution Symphony")
    for index, chord in enumerate(chords):
        writer.text(f"Iteration {index + 1}: {chord.quality} (tension: {chord.tension:.2f})")
        if index:
            writer.rest(QUARTER)
        writer.chord(chord.midi_numbers, duration=QUARTER, velocity=tension_velocity(chord.tension))
    writer.text("Resolution")
    writer.rest(QUARTER)
    writer.chord(RESOLUTION_CHORD, duration=WHOLE, velocity=100)
    return writer.save(path)


def debugging_to_midi(
    normal: SoulChord,
    buggy: SoulChord,
    fixed: SoulChord,
    path: str | Path,
) -> Path:
    writer = _TrackWriter(program=PIANO)
    writer.text("Normal Code (Piano)")
    writer.chord(normal.midi_numbers, duration=HALF, velocity=70)
    writer.program(DISTORTION_ORGAN)
    writer.text("BUG DETECTED (Distorted)")
    writer.rest(HALF)
    writer.chord(buggy.midi_numbers, duration=HALF, velocity=110)
    writer.program(STRINGS)
    writer.text("Bug Fixed (Strings)")
    writer.rest(HALF)
    writer.chord(fixed.midi_numbers, duration=WHOLE, velocity=80)
    return writer.save(path)
