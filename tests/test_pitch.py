import pytest

from codesymphony.errors import InvalidFrequencyError
from codesymphony.frequency import eigenvalue_to_frequency
from codesymphony.pitch import NOTE_NAMES, frequency_to_midi, midi_to_note_name, name_frequencies


def test_432_is_a4() -> None:
    assert frequency_to_midi(432.0) == 69
    assert midi_to_note_name(69) == "A4"


def test_concert_pitch_rounds_to_same_key() -> None:
    assert frequency_to_midi(440.0) == 69


def test_octaves() -> None:
    assert frequency_to_midi(864.0) == 81
    assert frequency_to_midi(216.0) == 57
    assert frequency_to_midi(108.0) == 45


@pytest.mark.parametrize(
    ("midi", "name"),
    [
        (60, "C4"),
        (61, "C#4"),
        (0, "C-1"),
        (11, "B-1"),
        (127, "G9"),
        (-1, "B-2"),
        (-12, "C-2"),
        (-13, "B-3"),
    ],
)
def test_note_names(midi: int, name: str) -> None:
    assert midi_to_note_name(midi) == name


def test_note_table_starts_at_c() -> None:
    assert NOTE_NAMES[0] == "C"
    assert len(NOTE_NAMES) == 12


@pytest.mark.parametrize("bad", [0.0, -432.0, float("nan"), float("inf")])
def test_rejects_non_positive_frequencies(bad: float) -> None:
    with pytest.raises(InvalidFrequencyError):
        frequency_to_midi(bad)


def test_band_pitches_have_expected_names() -> None:
    frequencies = [eigenvalue_to_frequency(value) for value in (0.05, 0.5, 5.0)]
    midi_numbers, notes = name_frequencies(frequencies)
    assert midi_numbers == (45, 61, 76)
    assert notes == ("A2", "C#4", "E5")
