import math

import pytest

from codesymphony.config import parse_config
from codesymphony.errors import InvalidEigenvalueError
from codesymphony.frequency import (
    chromatic_placement,
    eigenvalue_to_frequency,
    register_of,
    round_half_up,
    validate_spectrum,
)
from codesymphony.symphony import build_chord


def test_band_anchors() -> None:
    assert eigenvalue_to_frequency(0.0) == pytest.approx(108.0)
    assert eigenvalue_to_frequency(0.05) == pytest.approx(108.0)
    assert eigenvalue_to_frequency(0.5) == pytest.approx(216.0 * 2 ** (4 / 12))
    assert eigenvalue_to_frequency(5.0) == pytest.approx(432.0 * 2 ** (7 / 12))


def test_boundaries_belong_to_upper_band() -> None:
    assert eigenvalue_to_frequency(0.1) == pytest.approx(eigenvalue_to_frequency(0.5))
    assert eigenvalue_to_frequency(1.0) == pytest.approx(eigenvalue_to_frequency(5.0))
    assert eigenvalue_to_frequency(10.0) == pytest.approx(864.0)
    assert register_of(0.1) == "bass"
    assert register_of(1.0) == "midrange"
    assert register_of(10.0) == "harmonics"


def test_registers() -> None:
    assert register_of(0.05) == "sub_bass"
    assert register_of(0.5) == "bass"
    assert register_of(5.0) == "midrange"
    assert register_of(50.0) == "harmonics"


def test_chromatic_band_spreads_semitones() -> None:
    assert chromatic_placement(15.0) == (1, 6)
    assert eigenvalue_to_frequency(15.0) == pytest.approx(864.0 * math.sqrt(2))
    assert chromatic_placement(40.0) == (3, 0)


def test_overflowing_offset_wraps_by_default() -> None:
    # (19.9 mod 10) * 1.2 rounds to 12 semitones.
    assert chromatic_placement(19.9) == (1, 0)
    assert eigenvalue_to_frequency(19.9) == pytest.approx(864.0)


def test_overflowing_offset_can_be_preserved() -> None:
    config = parse_config(semitone_overflow="preserve")
    assert chromatic_placement(19.9, config) == (1, 12)
    assert eigenvalue_to_frequency(19.9, config) == pytest.approx(1728.0)


@pytest.mark.parametrize(
    "values",
    [
        [0.0, 0.02, 0.05, 0.0999],
        [0.1, 0.3, 0.7, 0.999],
        [1.0, 2.5, 7.0, 9.99],
        [10.0, 11.0, 12.5, 15.0, 17.0, 19.0],
    ],
)
def test_monotonic_within_band(values: list[float]) -> None:
    frequencies = [eigenvalue_to_frequency(value) for value in values]
    assert frequencies == sorted(frequencies)


@pytest.mark.parametrize("bad", [-0.001, -5.0, float("nan"), float("inf"), float("-inf")])
def test_rejects_invalid_eigenvalues(bad: float) -> None:
    with pytest.raises(InvalidEigenvalueError):
        eigenvalue_to_frequency(bad)


def test_validate_spectrum_fails_fast() -> None:
    assert validate_spectrum([3, 0.5]) == (3.0, 0.5)
    with pytest.raises(InvalidEigenvalueError):
        validate_spectrum([1.0, -1.0, 2.0])


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-0.5) == 0
    assert round_half_up(2.49) == 2


def test_huge_eigenvalue_is_out_of_range() -> None:
    assert math.isfinite(eigenvalue_to_frequency(1e300))
    with pytest.raises(InvalidEigenvalueError, match="out of range"):
        eigenvalue_to_frequency(1e307)
    with pytest.raises(InvalidEigenvalueError):
        build_chord([1.0, 1e307])
