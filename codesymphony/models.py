from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Quality = Literal["consonant", "dissonant", "neutral"]
Verdict = Literal["first", "second", "equal"]

_HEX_COLOR = re.compile(r"^#[0-9a-f]{6}$")


class HarmonyAnalysis(BaseModel):
    quality: Quality
    tension: float = Field(ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True, extra="forbid")


class SoulChord(BaseModel):
    """The complete output record of the pipeline for one code sample."""

    eigenvalues: tuple[float, ...] = ()
    frequencies: tuple[float, ...] = ()
    notes: tuple[str, ...] = ()
    midi_numbers: tuple[int, ...] = ()
    quality: Quality = "neutral"
    tension: float = Field(default=0.0, ge=0.0, le=1.0)
    color: str = "#000000"

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        normalized = value.lower()
        if not _HEX_COLOR.match(normalized):
            raise ValueError(f"color must look like #rrggbb, got {value!r}")
        return normalized

    @model_validator(mode="after")
    def _check_alignment(self) -> "SoulChord":
        size = len(self.frequencies)
        if len(self.notes) != size or len(self.midi_numbers) != size:
            raise ValueError("frequencies, notes and midi_numbers must be the same length")
        if len(self.eigenvalues) != size:
            raise ValueError("eigenvalues must be aligned with frequencies")
        return self

    @property
    def analysis(self) -> HarmonyAnalysis:
        return HarmonyAnalysis(quality=self.quality, tension=self.tension)


class ComparisonResult(BaseModel):
    first: SoulChord
    second: SoulChord
    harmonic_distance: float = Field(ge=0.0, le=1.0)
    more_consonant: Verdict

    model_config = ConfigDict(frozen=True, extra="forbid")
