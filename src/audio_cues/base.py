"""Capability interfaces for audio cues, plus do-nothing implementations.

Audio is optional: when a backend cannot be opened the session keeps
running with the null implementation in its place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Announcer(ABC):
    """Speaks short text cues. Fire-and-forget."""

    def open(self) -> None:
        """Acquire the speech backend. Raises AudioUnavailableError."""

    @abstractmethod
    def announce(self, text: str) -> None:
        ...

    def close(self) -> None:
        """Release the speech backend. Safe to call more than once."""


class ToneGenerator(ABC):
    """Emits one short audible click per call. Fire-and-forget."""

    def open(self) -> None:
        """Acquire the audio device. Raises AudioUnavailableError."""

    @abstractmethod
    def tick(self) -> None:
        ...

    def close(self) -> None:
        """Release the audio device. Safe to call more than once."""


class NullAnnouncer(Announcer):
    def announce(self, text: str) -> None:
        pass


class NullToneGenerator(ToneGenerator):
    def tick(self) -> None:
        pass
