from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from .config import DEFAULT_CONFIG, SEMITONES_PER_OCTAVE, EigenBand, HarmonyConfig, RegisterName
from .errors import InvalidEigenvalueError

_LOGGER = logging.getLogger("codesymphony.frequency")


def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side (``floor(x + 0.5)``)."""

    return math.floor(value + 0.5)


def check_eigenvalue(value: float) -> float:
    eigenvalue = float(value)
    if not math.isfinite(eigenvalue) or eigenvalue < 0.0:
        raise InvalidEigenvalueError(f"Eigenvalue must be finite and >= 0, got {value!r}")
    return eigenvalue


def validate_spectrum(values: Iterable[float]) -> tuple[float, ...]:
    """Fail fast on the first bad eigenvalue; never coerce."""

    return tuple(check_eigenvalue(value) for value in values)


def find_band(eigenvalue: float, config: HarmonyConfig = DEFAULT_CONFIG) -> EigenBand | None:
    """Return the fixed band holding ``eigenvalue``; None means the chromatic top band."""

    for band in config.bands:
        if band.contains(eigenvalue):
            return band
    return None


def register_of(eigenvalue: float, config: HarmonyConfig = DEFAULT_CONFIG) -> RegisterName:
    band = find_band(check_eigenvalue(eigenvalue), config)
    return "harmonics" if band is None else band.name


def chromatic_placement(
    eigenvalue: float, config: HarmonyConfig = DEFAULT_CONFIG
) -> tuple[int, int]:
    """Octave shift and semitone offset for eigenvalues above the fixed bands."""

    octave = math.floor(math.log2(eigenvalue / config.chromatic_threshold)) + 1
    offset = round_half_up((eigenvalue % config.chromatic_threshold) * config.chromatic_step)
    if offset >= SEMITONES_PER_OCTAVE and config.semitone_overflow == "wrap":
        offset %= SEMITONES_PER_OCTAVE
    return octave, offset


def eigenvalue_to_frequency(eigenvalue: float, config: HarmonyConfig = DEFAULT_CONFIG) -> float:
    """Map one eigenvalue to a frequency in Hz.

    Small eigenvalues land in the bass and large ones in the treble. The
    three fixed bands pin a pitch per band; above ``chromatic_threshold``
    the eigenvalue spreads chromatically over higher octaves.

    Eigenvalues so large that the frequency overflows a float (about
    4e306 and up) raise InvalidEigenvalueError.
    """

    value = check_eigenvalue(eigenvalue)
    band = find_band(value, config)
    if band is None:
        octave, offset = chromatic_placement(value, config)
    else:
        octave, offset = band.octave_shift, band.semitone_offset
    frequency = config.base_frequency * 2.0**octave * 2.0 ** (offset / SEMITONES_PER_OCTAVE)
    if not math.isfinite(frequency):
        raise InvalidEigenvalueError(
            f"Eigenvalue {eigenvalue!r} is out of range: its frequency overflows a float"
        )
    return frequency


def spectrum_to_frequencies(
    eigenvalues: Iterable[float], config: HarmonyConfig = DEFAULT_CONFIG
) -> tuple[float, ...]:
    spectrum = validate_spectrum(eigenvalues)
    frequencies = tuple(eigenvalue_to_frequency(value, config) for value in spectrum)
    _LOGGER.debug("Mapped %d eigenvalues to frequencies %s", len(spectrum), frequencies)
    return frequencies
