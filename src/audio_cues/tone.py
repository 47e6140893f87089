"""Metronome click synthesis and playback through pygame's mixer."""

from __future__ import annotations

import logging
import os

import numpy as np

from audio_cues.base import ToneGenerator
from audio_cues.exceptions import AudioUnavailableError

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

logger = logging.getLogger(__name__)

_DEFAULT_SAMPLE_RATE = 44100
_DEFAULT_FREQUENCY_HZ = 880.0
_DEFAULT_DURATION_S = 0.05
_FLOOR_GAIN = 0.001
_INT16_MAX = 32767


def synthesize_click(
    sample_rate: int = _DEFAULT_SAMPLE_RATE,
    frequency_hz: float = _DEFAULT_FREQUENCY_HZ,
    duration_s: float = _DEFAULT_DURATION_S,
    volume: float = 1.0,
) -> np.ndarray:
    """Render one click as mono int16 samples.

    A sine at *frequency_hz* whose gain decays exponentially from
    *volume* to ``volume * 0.001`` over *duration_s*.

    Args:
        sample_rate: Samples per second.
        frequency_hz: Pitch of the click.
        duration_s: Length of the click.
        volume: Peak gain in [0, 1].

    Returns:
        1-D int16 array of ``round(sample_rate * duration_s)`` samples.
    """
    volume = max(0.0, min(1.0, volume))
    n = int(round(sample_rate * duration_s))
    t = np.arange(n, dtype=np.float64) / sample_rate
    envelope = np.exp(np.log(_FLOOR_GAIN) * t / duration_s)
    wave = np.sin(2.0 * np.pi * frequency_hz * t) * envelope * volume
    return (wave * _INT16_MAX).astype(np.int16)


class PygameToneGenerator(ToneGenerator):
    """Plays a pre-rendered click on the pygame mixer.

    ``open()`` claims the audio device; ``close()`` releases it.
    """

    def __init__(
        self,
        frequency_hz: float = _DEFAULT_FREQUENCY_HZ,
        duration_s: float = _DEFAULT_DURATION_S,
        volume: float = 1.0,
        sample_rate: int = _DEFAULT_SAMPLE_RATE,
    ) -> None:
        self._frequency_hz = frequency_hz
        self._duration_s = duration_s
        self._volume = volume
        self._sample_rate = sample_rate
        self._sound: pygame.mixer.Sound | None = None

    @property
    def is_open(self) -> bool:
        return self._sound is not None

    def open(self) -> None:
        if self._sound is not None:
            return
        try:
            pygame.mixer.init(frequency=self._sample_rate, size=-16, channels=1)
        except pygame.error as exc:
            raise AudioUnavailableError(f"Audio device unavailable: {exc}") from exc

        mixer_config = pygame.mixer.get_init()
        if mixer_config is None:
            raise AudioUnavailableError("Audio device unavailable: mixer did not initialise")
        # The driver may not honour the requested rate or channel count.
        freq, _fmt, channels = mixer_config

        samples = synthesize_click(freq, self._frequency_hz, self._duration_s, self._volume)
        if channels > 1:
            samples = np.repeat(samples[:, np.newaxis], channels, axis=1)
        try:
            self._sound = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
        except pygame.error as exc:
            pygame.mixer.quit()
            raise AudioUnavailableError(f"Could not prepare click sound: {exc}") from exc
        logger.info("Audio device opened at %d Hz, %d channel(s)", freq, channels)

    def tick(self) -> None:
        if self._sound is None:
            return
        try:
            self._sound.play()
        except pygame.error as exc:
            logger.warning("Click playback failed: %s", exc)

    def close(self) -> None:
        if self._sound is None:
            return
        self._sound = None
        pygame.mixer.quit()
        logger.info("Audio device released")
