from __future__ import annotations

import logging
from collections.abc import Iterable

from .color import color_of
from .config import DEFAULT_CONFIG, HarmonyConfig
from .frequency import spectrum_to_frequencies, validate_spectrum
from .harmony import analyze
from .models import ComparisonResult, SoulChord, Verdict
from .pitch import name_frequencies
from .spectral import EigenvalueExtractor, GraphSpectralHasher

_LOGGER = logging.getLogger("codesymphony.symphony")


def build_chord(eigenvalues: Iterable[float], config: HarmonyConfig = DEFAULT_CONFIG) -> SoulChord:
    """Run a spectrum through the whole pipeline.

    The spectrum is validated up front so a bad value fails the call
    before any partial chord exists.
    """

    spectrum = validate_spectrum(eigenvalues)
    frequencies = spectrum_to_frequencies(spectrum, config)
    midi_numbers, notes = name_frequencies(frequencies, config)
    analysis = analyze(frequencies, config)
    return SoulChord(
        eigenvalues=spectrum,
        frequencies=frequencies,
        notes=notes,
        midi_numbers=midi_numbers,
        quality=analysis.quality,
        tension=analysis.tension,
        color=color_of(frequencies, config),
    )


def more_consonant(first: float, second: float, config: HarmonyConfig = DEFAULT_CONFIG) -> Verdict:
    if first < second - config.tolerance:
        return "first"
    if second < first - config.tolerance:
        return "second"
    return "equal"


def compare_chords(
    first: SoulChord, second: SoulChord, config: HarmonyConfig = DEFAULT_CONFIG
) -> ComparisonResult:
    return ComparisonResult(
        first=first,
        second=second,
        harmonic_distance=abs(first.tension - second.tension),
        more_consonant=more_consonant(first.tension, second.tension, config),
    )


class CodeSymphony:
    """Stateless front door from code strings to chords.

    Holds only the eigenvalue extractor and the config; each call is
    independent, so one instance can be shared across threads.
    """

    def __init__(
        self,
        extractor: EigenvalueExtractor | None = None,
        *,
        config: HarmonyConfig = DEFAULT_CONFIG,
    ) -> None:
        if extractor is None:
            extractor = GraphSpectralHasher()
        self.extractor = extractor
        self.config = config

    def code_to_chord(self, code: str) -> SoulChord:
        eigenvalues = self.extractor.extract_top_eigenvalues(code)
        chord = build_chord(eigenvalues, self.config)
        _LOGGER.info(
            "Chord %s quality=%s tension=%.3f", " ".join(chord.notes), chord.quality, chord.tension
        )
        return chord

    def compare_harmony(self, first_code: str, second_code: str) -> ComparisonResult:
        first = self.code_to_chord(first_code)
        second = self.code_to_chord(second_code)
        return compare_chords(first, second, self.config)

    def code_to_progression(self, codes: Iterable[str]) -> list[SoulChord]:
        return [self.code_to_chord(code) for code in codes]


_DEFAULT_SYMPHONY = CodeSymphony()


def code_to_chord(code: str) -> SoulChord:
    return _DEFAULT_SYMPHONY.code_to_chord(code)


def compare_harmony(first_code: str, second_code: str) -> ComparisonResult:
    return _DEFAULT_SYMPHONY.compare_harmony(first_code, second_code)
