"""Mutable per-session run state and its read-only snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from interval_engine.models.enums import (
    DEFAULT_CADENCE_BPM,
    MAX_CADENCE_BPM,
    MIN_CADENCE_BPM,
    Phase,
)
from interval_engine.models.session_plan import SessionPlan


def clamp_cadence(bpm: int) -> int:
    """Clamp a cadence to the metronome's supported range."""
    return max(MIN_CADENCE_BPM, min(MAX_CADENCE_BPM, int(bpm)))


@dataclass
class SessionRunState:
    """Where the athlete is in the session right now.

    Owned and mutated exclusively by the SessionController.
    ``repetition`` is 0 outside RUN/WALK.
    """

    phase: Phase
    repetition: int
    time_left_s: int
    phase_duration_s: int
    is_running: bool = False
    cadence_bpm: int = DEFAULT_CADENCE_BPM

    @classmethod
    def initial(cls, plan: SessionPlan, cadence_bpm: int = DEFAULT_CADENCE_BPM) -> "SessionRunState":
        return cls(
            phase=Phase.WARMUP,
            repetition=0,
            time_left_s=plan.warmup_s,
            phase_duration_s=plan.warmup_s,
            is_running=False,
            cadence_bpm=clamp_cadence(cadence_bpm),
        )


@dataclass(frozen=True)
class RunSnapshot:
    """Read-only copy of the run state for rendering."""

    phase: Phase
    repetition: int
    repetitions: int
    time_left_s: int
    phase_duration_s: int
    is_running: bool
    cadence_bpm: int

    @property
    def progress(self) -> float:
        """Sweep fraction of the progress ring (1.0 at phase start)."""
        if self.phase_duration_s <= 0:
            return 0.0
        return self.time_left_s / self.phase_duration_s

    @property
    def shows_repetition(self) -> bool:
        return self.phase.has_repetition
