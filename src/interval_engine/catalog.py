"""Session catalog — the fixed list of run/walk plans offered to the athlete.

Plans progress from 10 s run / 50 s walk up to 20 min continuous running.
Every plan opens with a 3 min warm-up and closes with a 3 min cool-down.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from interval_engine.exceptions import InvalidPlanError, PlanNotFoundError
from interval_engine.models.session_plan import IntervalSet, SessionPlan

logger = logging.getLogger(__name__)

_WARMUP_S = 180
_COOLDOWN_S = 180


def _plan(run_s: int, walk_s: int, reps: int) -> SessionPlan:
    return SessionPlan(
        warmup_s=_WARMUP_S,
        cooldown_s=_COOLDOWN_S,
        intervals=IntervalSet(run_s=run_s, walk_s=walk_s, repetitions=reps),
    )


SESSIONS: tuple[SessionPlan, ...] = (
    _plan(10, 50, 15),
    _plan(20, 40, 15),
    _plan(30, 30, 15),
    _plan(30, 30, 20),
    _plan(40, 20, 15),
    _plan(40, 20, 20),
    _plan(60, 30, 10),
    _plan(60, 30, 12),
    _plan(120, 60, 5),
    _plan(180, 60, 4),
    _plan(240, 60, 4),
    _plan(360, 60, 3),
    _plan(480, 60, 2),
    _plan(600, 60, 2),
    _plan(900, 0, 1),
    _plan(1200, 0, 1),
)


def select_plan(index: int, catalog: Sequence[SessionPlan] = SESSIONS) -> SessionPlan:
    """Return the plan at *index* or refuse with PlanNotFoundError."""
    if not 0 <= index < len(catalog):
        raise PlanNotFoundError(index, len(catalog))
    return catalog[index]


def load_catalog(path: Path | str) -> tuple[SessionPlan, ...]:
    """Load and validate a JSON catalog.

    The file holds a list of plans in the native mapping shape
    (``{"warmup": .., "cooldown": .., "intervals": {"run": .., "walk": .., "reps": ..}}``).
    Every entry is validated before anything is returned.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidPlanError(f"Catalog {path}: {exc}") from exc
    if not isinstance(raw, list) or not raw:
        raise InvalidPlanError(f"Catalog {path} must be a non-empty JSON list")

    plans: list[SessionPlan] = []
    for position, entry in enumerate(raw):
        try:
            plans.append(SessionPlan.from_dict(entry))
        except InvalidPlanError as exc:
            raise InvalidPlanError(f"Catalog entry {position}: {exc}") from exc
    logger.info("Loaded %d session plans from %s", len(plans), path)
    return tuple(plans)


def _format_seconds(seconds: int) -> str:
    """30 -> '30"', 120 -> "2'", 90 -> "1'30\""."""
    if seconds < 60:
        return f'{seconds}"'
    mins, secs = divmod(seconds, 60)
    if secs:
        return f"{mins}'{secs:02d}\""
    return f"{mins}'"


def describe_plan(plan: SessionPlan) -> str:
    """Card text for a plan, e.g. '30" Course / 30" Marche'."""
    text = f"{_format_seconds(plan.intervals.run_s)} Course"
    if plan.has_walk:
        text += f" / {_format_seconds(plan.intervals.walk_s)} Marche"
    return text
