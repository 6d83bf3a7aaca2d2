from __future__ import annotations

import math
from collections.abc import Sequence

from .config import DEFAULT_CONFIG, HarmonyConfig
from .errors import InvalidFrequencyError
from .frequency import round_half_up

SILENT_COLOR = "#000000"
_FULL = 255.0
_THIRD = 1.0 / 3.0


def log_position(frequency: float, config: HarmonyConfig = DEFAULT_CONFIG) -> float:
    """Where ``frequency`` sits between the low and high anchors on a log scale.

    Not clamped: frequencies outside the anchors extrapolate past 0 or 1.
    """

    if frequency <= 0.0:
        raise InvalidFrequencyError(f"Frequency must be > 0, got {frequency!r}")
    low = math.log2(config.color_low_hz)
    high = math.log2(config.color_high_hz)
    return (math.log2(frequency) - low) / (high - low)


def position_to_rgb(position: float) -> tuple[float, float, float]:
    """Low = red, mid = green, high = blue."""

    if position < _THIRD:
        return _FULL * (1.0 - position * 3.0), _FULL * position * 3.0, 0.0
    if position < 2.0 * _THIRD:
        shifted = (position - _THIRD) * 3.0
        return 0.0, _FULL * (1.0 - shifted), _FULL * shifted
    return 0.0, 0.0, _FULL


def _channel(total: float, count: int) -> int:
    return min(255, max(0, round_half_up(total / count)))


def color_of(frequencies: Sequence[float], config: HarmonyConfig = DEFAULT_CONFIG) -> str:
    if not frequencies:
        return SILENT_COLOR

    red = green = blue = 0.0
    for freq in frequencies:
        r, g, b = position_to_rgb(log_position(freq, config))
        red += r
        green += g
        blue += b

    count = len(frequencies)
    return "#{:02x}{:02x}{:02x}".format(
        _channel(red, count), _channel(green, count), _channel(blue, count)
    )
