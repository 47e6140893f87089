"""Session plan models — the fixed structure of one run/walk workout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from interval_engine.exceptions import InvalidPlanError
from interval_engine.models.enums import Phase


def _require_int(name: str, value: Any, minimum: int) -> None:
    # bool is an int subclass; True is not a duration.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPlanError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidPlanError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class IntervalSet:
    """The repeated main set of a session.

    Attributes:
        run_s: Duration of each run interval in seconds.
        walk_s: Duration of each walk interval in seconds. Zero means the
            run intervals chain directly with no walk phase.
        repetitions: Number of run intervals.
    """

    run_s: int
    walk_s: int
    repetitions: int

    def __post_init__(self) -> None:
        _require_int("run_s", self.run_s, 1)
        _require_int("walk_s", self.walk_s, 0)
        _require_int("repetitions", self.repetitions, 1)


@dataclass(frozen=True)
class SessionPlan:
    """Complete plan: warm-up, repeated intervals, cool-down.

    Validated on construction so a malformed plan is refused when it is
    selected, never in the middle of a run.
    """

    warmup_s: int
    cooldown_s: int
    intervals: IntervalSet

    def __post_init__(self) -> None:
        _require_int("warmup_s", self.warmup_s, 1)
        _require_int("cooldown_s", self.cooldown_s, 1)
        if not isinstance(self.intervals, IntervalSet):
            raise InvalidPlanError(
                f"intervals must be an IntervalSet, got {type(self.intervals).__name__}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionPlan":
        """Build a plan from the catalog's native mapping shape.

        Expected keys: ``warmup``, ``cooldown`` and ``intervals`` holding
        ``run``, ``walk`` and ``reps``.
        """
        try:
            intervals = data["intervals"]
            return cls(
                warmup_s=data["warmup"],
                cooldown_s=data["cooldown"],
                intervals=IntervalSet(
                    run_s=intervals["run"],
                    walk_s=intervals["walk"],
                    repetitions=intervals["reps"],
                ),
            )
        except (KeyError, TypeError) as exc:
            raise InvalidPlanError(f"Malformed plan entry: {exc!r}") from exc

    @property
    def has_walk(self) -> bool:
        return self.intervals.walk_s > 0

    def duration_for(self, phase: Phase) -> int:
        """Full countdown length of *phase* in seconds (0 for FINISHED)."""
        if phase is Phase.WARMUP:
            return self.warmup_s
        if phase is Phase.RUN:
            return self.intervals.run_s
        if phase is Phase.WALK:
            return self.intervals.walk_s
        if phase is Phase.COOLDOWN:
            return self.cooldown_s
        return 0

    @property
    def total_duration_s(self) -> int:
        """Total session length in seconds, walk phases included."""
        reps = self.intervals.repetitions
        main = reps * self.intervals.run_s + reps * self.intervals.walk_s
        return self.warmup_s + main + self.cooldown_s
