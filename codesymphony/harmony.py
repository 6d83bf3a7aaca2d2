from __future__ import annotations

import logging
from collections.abc import Sequence
from itertools import combinations

from .config import DEFAULT_CONFIG, HarmonyConfig
from .errors import InvalidFrequencyError
from .models import HarmonyAnalysis, Quality

_LOGGER = logging.getLogger("codesymphony.harmony")


def classify(tension: float, config: HarmonyConfig = DEFAULT_CONFIG) -> Quality:
    if tension < config.consonant_below:
        return "consonant"
    if tension > config.dissonant_above:
        return "dissonant"
    return "neutral"


def is_consonant_ratio(ratio: float, config: HarmonyConfig = DEFAULT_CONFIG) -> bool:
    """True when ``ratio`` or its reciprocal sits near a consonant interval."""

    reciprocal = 1.0 / ratio
    for consonant in config.consonant_ratios:
        if abs(ratio - consonant) < config.tolerance:
            return True
        if abs(reciprocal - consonant) < config.tolerance:
            return True
    return False


def analyze(
    frequencies: Sequence[float], config: HarmonyConfig = DEFAULT_CONFIG
) -> HarmonyAnalysis:
    """Score a chord by the share of its pairwise intervals that are consonant.

    Ratios are taken in index order (``f[j] / f[i]`` for ``i < j``); the
    reciprocal check makes the result independent of that order. Fewer than
    two frequencies form no interval and score as neutral with zero tension.
    """

    if len(frequencies) < 2:
        return HarmonyAnalysis(quality="neutral", tension=0.0)
    if any(freq <= 0.0 for freq in frequencies):
        raise InvalidFrequencyError("Harmony analysis needs strictly positive frequencies")

    total = 0
    consonant = 0
    for first, second in combinations(frequencies, 2):
        total += 1
        if is_consonant_ratio(second / first, config):
            consonant += 1

    tension = 1.0 - consonant / total
    quality = classify(tension, config)
    _LOGGER.debug("%d/%d consonant pairs -> tension=%.3f (%s)", consonant, total, tension, quality)
    return HarmonyAnalysis(quality=quality, tension=tension)
