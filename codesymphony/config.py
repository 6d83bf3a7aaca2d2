from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import InvalidConfigError

_LOGGER = logging.getLogger("codesymphony.config")

RegisterName = Literal["sub_bass", "bass", "midrange", "harmonics"]
SemitoneOverflow = Literal["wrap", "preserve"]

SEMITONES_PER_OCTAVE = 12

# -----------------------------------------------------------------------------
# Named constants
# -----------------------------------------------------------------------------

BASE_FREQUENCY_HZ = 432.0
REFERENCE_MIDI = 69
CHROMATIC_THRESHOLD = 10.0
CHROMATIC_STEP = 1.2
TOLERANCE = 0.05
CONSONANT_BELOW = 0.3
DISSONANT_ABOVE = 0.7
COLOR_LOW_HZ = 27.5  # A0
COLOR_HIGH_HZ = 4186.0  # C8

# unison, octave, fifth, fourth, major/minor third, major/minor sixth
CONSONANT_RATIOS: tuple[float, ...] = (1.0, 2.0, 1.5, 1.333, 1.25, 1.2, 1.667, 1.6)

REGISTER_DESCRIPTIONS: Mapping[RegisterName, str] = MappingProxyType(
    {
        "sub_bass": "felt, not heard",
        "bass": "foundation",
        "midrange": "melody",
        "harmonics": "sparkle",
    }
)


class EigenBand(BaseModel):
    """Half-open eigenvalue interval anchored to a fixed pitch.

    ``upper=None`` marks an unbounded band; the fixed bands below the
    chromatic threshold always carry an explicit upper bound.
    """

    name: RegisterName
    lower: float = Field(ge=0.0)
    upper: Optional[float] = None
    octave_shift: int
    semitone_offset: int = Field(ge=0, lt=SEMITONES_PER_OCTAVE)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _check_bounds(self) -> "EigenBand":
        if self.upper is not None and self.upper <= self.lower:
            raise ValueError(f"band {self.name!r} has upper <= lower")
        return self

    def contains(self, value: float) -> bool:
        if value < self.lower:
            return False
        return self.upper is None or value < self.upper


DEFAULT_BANDS: tuple[EigenBand, ...] = (
    EigenBand(name="sub_bass", lower=0.0, upper=0.1, octave_shift=-2, semitone_offset=0),
    EigenBand(name="bass", lower=0.1, upper=1.0, octave_shift=-1, semitone_offset=4),
    EigenBand(name="midrange", lower=1.0, upper=10.0, octave_shift=0, semitone_offset=7),
)


class HarmonyConfig(BaseModel):
    """Every tunable constant of the chord engine."""

    base_frequency: float = Field(default=BASE_FREQUENCY_HZ, gt=0.0)
    reference_midi: int = REFERENCE_MIDI
    bands: tuple[EigenBand, ...] = DEFAULT_BANDS
    chromatic_threshold: float = Field(default=CHROMATIC_THRESHOLD, gt=0.0)
    chromatic_step: float = Field(default=CHROMATIC_STEP, ge=0.0)
    semitone_overflow: SemitoneOverflow = "wrap"
    consonant_ratios: tuple[float, ...] = CONSONANT_RATIOS
    tolerance: float = Field(default=TOLERANCE, ge=0.0)
    consonant_below: float = Field(default=CONSONANT_BELOW, ge=0.0, le=1.0)
    dissonant_above: float = Field(default=DISSONANT_ABOVE, ge=0.0, le=1.0)
    color_low_hz: float = Field(default=COLOR_LOW_HZ, gt=0.0)
    color_high_hz: float = Field(default=COLOR_HIGH_HZ, gt=0.0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _check_consistency(self) -> "HarmonyConfig":
        if not self.bands:
            raise ValueError("at least one fixed band is required")
        if self.bands[0].lower != 0.0:
            raise ValueError("the first band must start at 0")
        for below, above in zip(self.bands, self.bands[1:]):
            if below.upper != above.lower:
                raise ValueError(f"bands {below.name!r} and {above.name!r} are not contiguous")
        if self.bands[-1].upper != self.chromatic_threshold:
            raise ValueError("the last fixed band must end at chromatic_threshold")
        if any(ratio <= 0.0 for ratio in self.consonant_ratios):
            raise ValueError("consonant ratios must be positive")
        if self.consonant_below > self.dissonant_above:
            raise ValueError("consonant_below must not exceed dissonant_above")
        if self.color_high_hz <= self.color_low_hz:
            raise ValueError("color_high_hz must be above color_low_hz")
        return self


DEFAULT_CONFIG = HarmonyConfig()


def parse_config(data: Mapping[str, Any] | None = None, **overrides: Any) -> HarmonyConfig:
    """Build a config from a mapping, raising InvalidConfigError on bad input."""

    payload: dict[str, Any] = dict(data or {})
    payload.update(overrides)
    try:
        return HarmonyConfig.model_validate(payload)
    except ValidationError as exc:
        _LOGGER.debug("Rejected harmony config: %s", exc)
        raise InvalidConfigError(f"Invalid harmony config: {exc}") from exc


def describe_register(name: RegisterName) -> str:
    try:
        return REGISTER_DESCRIPTIONS[name]
    except KeyError as exc:
        raise InvalidConfigError(f"Unknown register: {name!r}") from exc
