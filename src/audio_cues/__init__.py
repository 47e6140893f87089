"""Audio cue adapters — all sound and speech output lives here.

The pygame and pyttsx3 backends are imported from ``audio_cues.tone`` and
``audio_cues.speech`` directly, so importing the interfaces stays cheap.
"""

from audio_cues.base import Announcer, NullAnnouncer, NullToneGenerator, ToneGenerator
from audio_cues.exceptions import AudioCueError, AudioUnavailableError

__all__ = [
    "Announcer",
    "AudioCueError",
    "AudioUnavailableError",
    "NullAnnouncer",
    "NullToneGenerator",
    "ToneGenerator",
]
