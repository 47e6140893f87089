"""Enumerations and fixed constants for the interval engine."""

from enum import Enum


class Phase(str, Enum):
    """Session phases in the order the athlete goes through them.

    RUN and WALK alternate; every other phase is entered once.
    """

    WARMUP = "warmup"
    RUN = "run"
    WALK = "walk"
    COOLDOWN = "cooldown"
    FINISHED = "finished"

    @property
    def has_repetition(self) -> bool:
        """True for the phases that carry a repetition counter."""
        return self in (Phase.RUN, Phase.WALK)


# ---------------------------------------------------------------------------
# Cadence metronome
# ---------------------------------------------------------------------------
MIN_CADENCE_BPM = 165
MAX_CADENCE_BPM = 180
DEFAULT_CADENCE_BPM = 170

# ---------------------------------------------------------------------------
# Countdown
# ---------------------------------------------------------------------------
COUNTDOWN_PERIOD_S = 1.0

# ---------------------------------------------------------------------------
# Spoken cues
# ---------------------------------------------------------------------------
WALK_CUE = "Marchez"
CUE_LOCALE = "fr-FR"

