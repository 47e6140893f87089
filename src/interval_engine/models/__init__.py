"""Data models for the interval engine."""

from interval_engine.models.enums import (
    DEFAULT_CADENCE_BPM,
    MAX_CADENCE_BPM,
    MIN_CADENCE_BPM,
    Phase,
)
from interval_engine.models.run_state import RunSnapshot, SessionRunState, clamp_cadence
from interval_engine.models.session_plan import IntervalSet, SessionPlan

__all__ = [
    "DEFAULT_CADENCE_BPM",
    "IntervalSet",
    "MAX_CADENCE_BPM",
    "MIN_CADENCE_BPM",
    "Phase",
    "RunSnapshot",
    "SessionPlan",
    "SessionRunState",
    "clamp_cadence",
]
