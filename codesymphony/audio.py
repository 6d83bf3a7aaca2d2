from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, Callable, cast

import numpy as np
import soundfile as sf  # type: ignore[import]
from numpy.typing import NDArray

FloatArray = NDArray[np.float32]
AudioNumbers = NDArray[np.floating[Any]] | Sequence[float] | FloatArray

SAMPLE_RATE = 44_100
WAV_SUBTYPE = "FLOAT"


def ensure_audio_contract(audio: AudioNumbers) -> FloatArray:
    """Flatten to float32 mono; scale down when the peak exceeds 1.0."""

    mono: FloatArray = np.asarray(audio, dtype=np.float32).ravel()
    if not mono.size:
        return mono
    peak = float(np.abs(mono).max())
    return mono / peak if peak > 1.0 else mono


def silence(duration: float, *, sample_rate: int = SAMPLE_RATE) -> FloatArray:
    return np.zeros(max(0, int(sample_rate * duration)), dtype=np.float32)


def write_wav(
    path: str | Path,
    audio: AudioNumbers,
    *,
    sample_rate: int = SAMPLE_RATE,
) -> Path:
    """Write mono samples to ``path`` as 32-bit float wav."""

    target = Path(path)
    samples = ensure_audio_contract(audio)
    with sf.SoundFile(
        target,
        mode="w",
        samplerate=sample_rate,
        channels=1,
        subtype=WAV_SUBTYPE,
    ) as handle:
        write_fn = getattr(handle, "write", None)
        assert callable(write_fn)
        # soundfile ships no stubs for SoundFile.write.
        cast(Callable[[FloatArray], None], write_fn)(samples)
    return target
