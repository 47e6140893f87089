"""Custom exception hierarchy for the audio cue adapters."""

from __future__ import annotations


class AudioCueError(Exception):
    """Base exception for all audio_cues errors."""


class AudioUnavailableError(AudioCueError):
    """The audio device or speech backend could not be opened."""
