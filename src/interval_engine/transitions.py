"""Phase state machine — what comes after the phase that just expired.

The sequencing lives in a single lookup table keyed by
(phase, plan has walk intervals, current repetition is the last one).
A None in a key means "any value". Lookups try the most specific key
first, the same fallback order used for coaching cue tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from interval_engine.exceptions import PhaseTransitionError
from interval_engine.models.enums import WALK_CUE, Phase
from interval_engine.models.session_plan import SessionPlan


class RepetitionStep(Enum):
    """How a transition changes the repetition counter."""

    FIRST = auto()   # set to 1
    KEEP = auto()    # unchanged
    NEXT = auto()    # +1
    CLEAR = auto()   # back to 0


@dataclass(frozen=True)
class _Rule:
    next_phase: Phase
    repetition: RepetitionStep
    cue: str | None = None


@dataclass(frozen=True)
class PhaseTransition:
    """Result of a transition: the phase to enter and its countdown."""

    phase: Phase
    repetition: int
    duration_s: int
    cue: str | None = None


_TRANSITIONS: dict[tuple[Phase, bool | None, bool | None], _Rule] = {
    (Phase.WARMUP, None, None): _Rule(Phase.RUN, RepetitionStep.FIRST),

    # With walk intervals every run is followed by a walk
    (Phase.RUN, True, None): _Rule(Phase.WALK, RepetitionStep.KEEP, WALK_CUE),

    # Without walk intervals runs chain directly and count on leaving RUN
    (Phase.RUN, False, False): _Rule(Phase.RUN, RepetitionStep.NEXT),
    (Phase.RUN, False, True): _Rule(Phase.COOLDOWN, RepetitionStep.CLEAR),

    (Phase.WALK, None, False): _Rule(Phase.RUN, RepetitionStep.NEXT),
    (Phase.WALK, None, True): _Rule(Phase.COOLDOWN, RepetitionStep.CLEAR),

    (Phase.COOLDOWN, None, None): _Rule(Phase.FINISHED, RepetitionStep.CLEAR),
}


def _lookup(phase: Phase, has_walk: bool, is_last: bool) -> _Rule:
    for key in (
        (phase, has_walk, is_last),
        (phase, has_walk, None),
        (phase, None, is_last),
        (phase, None, None),
    ):
        rule = _TRANSITIONS.get(key)
        if rule is not None:
            return rule
    raise PhaseTransitionError(f"No transition out of phase {phase.value!r}")


def _apply_step(step: RepetitionStep, repetition: int) -> int:
    if step is RepetitionStep.FIRST:
        return 1
    if step is RepetitionStep.NEXT:
        return repetition + 1
    if step is RepetitionStep.CLEAR:
        return 0
    return repetition


def next_phase(plan: SessionPlan, phase: Phase, repetition: int) -> PhaseTransition:
    """Compute the phase that follows *phase* once its countdown expires.

    Args:
        plan: The session being run.
        phase: The phase whose countdown just reached zero.
        repetition: The current repetition (0 outside RUN/WALK).

    Returns:
        A PhaseTransition with the new phase, repetition, full countdown
        duration and an optional spoken cue.

    Raises:
        PhaseTransitionError: If *phase* is FINISHED (terminal).
    """
    is_last = repetition >= plan.intervals.repetitions
    rule = _lookup(phase, plan.has_walk, is_last)
    return PhaseTransition(
        phase=rule.next_phase,
        repetition=_apply_step(rule.repetition, repetition),
        duration_s=plan.duration_for(rule.next_phase),
        cue=rule.cue,
    )


def phase_timeline(plan: SessionPlan) -> Iterator[PhaseTransition]:
    """Yield every phase of *plan* in order, from warm-up to FINISHED.

    The first item is the initial warm-up state; each following item is
    what ``next_phase`` returns for the previous one.
    """
    current = PhaseTransition(Phase.WARMUP, 0, plan.warmup_s)
    yield current
    while current.phase is not Phase.FINISHED:
        current = next_phase(plan, current.phase, current.repetition)
        yield current
