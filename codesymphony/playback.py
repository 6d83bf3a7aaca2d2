from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict

from .audio import SAMPLE_RATE, FloatArray, ensure_audio_contract
from .errors import PlaybackError

_LOGGER = logging.getLogger("codesymphony.playback")

_INT16_SCALE = 32_767


class PlaybackBackend(BaseModel):
    """A named blocking ``play(samples, sample_rate)`` callable."""

    name: str
    play_audio: Callable[[FloatArray, int], None]

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )


def _sounddevice_backend() -> PlaybackBackend | None:
    try:
        import sounddevice as sd_module  # type: ignore[import]
    except (ImportError, OSError) as exc:
        # PortAudio missing surfaces as OSError.
        _LOGGER.debug("sounddevice unavailable: %s", exc)
        return None
    sd: Any = sd_module

    def _play(samples: FloatArray, sample_rate: int) -> None:
        sd.play(ensure_audio_contract(samples), samplerate=sample_rate, blocking=True)

    return PlaybackBackend(name="sounddevice", play_audio=_play)


def _simpleaudio_backend() -> PlaybackBackend | None:
    try:
        import simpleaudio as sa_module  # type: ignore[import]
    except ImportError as exc:
        _LOGGER.debug("simpleaudio unavailable: %s", exc)
        return None
    sa: Any = sa_module

    def _pcm16(samples: FloatArray) -> NDArray[np.int16]:
        clipped = np.clip(ensure_audio_contract(samples), -1.0, 1.0)
        return (clipped * _INT16_SCALE).astype(np.int16)

    def _play(samples: FloatArray, sample_rate: int) -> None:
        sa.play_buffer(_pcm16(samples), 1, 2, sample_rate).wait_done()

    return PlaybackBackend(name="simpleaudio", play_audio=_play)


_LOADERS: tuple[Callable[[], PlaybackBackend | None], ...] = (
    _sounddevice_backend,
    _simpleaudio_backend,
)


def _load_backend() -> PlaybackBackend | None:
    for loader in _LOADERS:
        backend = loader()
        if backend is not None:
            return backend
    return None


def resolve_backend() -> PlaybackBackend:
    backend = _load_backend()
    if backend is None:
        raise PlaybackError(
            "No audio backend found. Install the 'playback' extra (sounddevice) "
            "or simpleaudio, or render to a wav file with --wav."
        )
    return backend


def play_audio(samples: FloatArray, *, sample_rate: int = SAMPLE_RATE) -> str:
    """Block until the samples finish playing; returns the backend name."""

    backend = resolve_backend()
    _LOGGER.info("Playing %.2fs of audio via %s", len(samples) / sample_rate, backend.name)
    backend.play_audio(samples, sample_rate)
    return backend.name
