from __future__ import annotations

from .audio import SAMPLE_RATE, write_wav
from .color import color_of
from .config import DEFAULT_CONFIG, EigenBand, HarmonyConfig, parse_config
from .errors import (
    CodeSymphonyError,
    InvalidConfigError,
    InvalidEigenvalueError,
    InvalidFrequencyError,
    PlaybackError,
)
from .frequency import eigenvalue_to_frequency, register_of, validate_spectrum
from .harmony import analyze, classify
from .logging_utils import configure_logging as _configure_logging
from .midi import chord_to_midi, comparison_to_midi, debugging_to_midi, evolution_to_midi
from .models import ComparisonResult, HarmonyAnalysis, Quality, SoulChord, Verdict
from .pitch import NOTE_NAMES, frequency_to_midi, midi_to_note_name
from .spectral import EigenvalueExtractor, GraphSpectralHasher
from .symphony import (
    CodeSymphony,
    build_chord,
    code_to_chord,
    compare_chords,
    compare_harmony,
)
from .synth import render_arpeggio, render_chord, render_progression

__all__ = [
    "DEFAULT_CONFIG",
    "NOTE_NAMES",
    "SAMPLE_RATE",
    "CodeSymphony",
    "CodeSymphonyError",
    "ComparisonResult",
    "EigenBand",
    "EigenvalueExtractor",
    "GraphSpectralHasher",
    "HarmonyAnalysis",
    "HarmonyConfig",
    "InvalidConfigError",
    "InvalidEigenvalueError",
    "InvalidFrequencyError",
    "PlaybackError",
    "Quality",
    "SoulChord",
    "Verdict",
    "analyze",
    "build_chord",
    "chord_to_midi",
    "classify",
    "code_to_chord",
    "color_of",
    "compare_chords",
    "compare_harmony",
    "comparison_to_midi",
    "debugging_to_midi",
    "eigenvalue_to_frequency",
    "evolution_to_midi",
    "frequency_to_midi",
    "midi_to_note_name",
    "parse_config",
    "register_of",
    "render_arpeggio",
    "render_chord",
    "render_progression",
    "validate_spectrum",
    "write_wav",
]

__version__ = "0.1.0"

_configure_logging()
del _configure_logging
