"""Interval engine — timing and phase-transition core of the run/walk coach."""

from interval_engine.catalog import SESSIONS, describe_plan, load_catalog, select_plan
from interval_engine.controller import SessionController
from interval_engine.exceptions import (
    IntervalEngineError,
    InvalidPlanError,
    PhaseTransitionError,
    PlanNotFoundError,
    SessionClosedError,
)
from interval_engine.models import IntervalSet, Phase, RunSnapshot, SessionPlan
from interval_engine.transitions import PhaseTransition, next_phase, phase_timeline

__all__ = [
    "IntervalEngineError",
    "IntervalSet",
    "InvalidPlanError",
    "Phase",
    "PhaseTransition",
    "PhaseTransitionError",
    "PlanNotFoundError",
    "RunSnapshot",
    "SESSIONS",
    "SessionClosedError",
    "SessionController",
    "SessionPlan",
    "describe_plan",
    "load_catalog",
    "next_phase",
    "phase_timeline",
]
