import pytest
from pydantic import ValidationError

from codesymphony.models import ComparisonResult, HarmonyAnalysis, SoulChord


def _chord(**overrides: object) -> SoulChord:
    payload: dict[str, object] = {
        "eigenvalues": (5.0,),
        "frequencies": (647.27,),
        "notes": ("E5",),
        "midi_numbers": (76,),
        "quality": "neutral",
        "tension": 0.0,
        "color": "#00FF00",
    }
    payload.update(overrides)
    return SoulChord.model_validate(payload)


def test_color_is_normalized_to_lowercase() -> None:
    assert _chord().color == "#00ff00"


def test_rejects_misaligned_lengths() -> None:
    with pytest.raises(ValidationError):
        _chord(notes=("E5", "A4"))
    with pytest.raises(ValidationError):
        _chord(midi_numbers=())
    with pytest.raises(ValidationError):
        _chord(eigenvalues=(1.0, 2.0))


def test_rejects_out_of_range_tension() -> None:
    with pytest.raises(ValidationError):
        _chord(tension=1.5)
    with pytest.raises(ValidationError):
        _chord(tension=-0.1)


def test_rejects_bad_color_and_quality() -> None:
    with pytest.raises(ValidationError):
        _chord(color="red")
    with pytest.raises(ValidationError):
        _chord(quality="sublime")


def test_chord_is_frozen() -> None:
    chord = _chord()
    with pytest.raises(ValidationError):
        chord.tension = 0.5  # type: ignore[misc]


def test_chord_is_a_value_type() -> None:
    assert _chord() == _chord()
    assert _chord().analysis == HarmonyAnalysis(quality="neutral", tension=0.0)


def test_comparison_requires_known_verdict() -> None:
    chord = _chord()
    with pytest.raises(ValidationError):
        ComparisonResult(
            first=chord,
            second=chord,
            harmonic_distance=0.0,
            more_consonant="both",  # type: ignore[arg-type]
        )
