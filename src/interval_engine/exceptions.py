"""Custom exception hierarchy for the interval engine."""

from __future__ import annotations


class IntervalEngineError(Exception):
    """Base exception for all interval_engine errors."""


class InvalidPlanError(IntervalEngineError):
    """A session plan has non-positive durations or repetition counts."""


class PlanNotFoundError(IntervalEngineError, LookupError):
    """The requested catalog index does not exist."""

    def __init__(self, index: int, catalog_size: int) -> None:
        super().__init__(
            f"No session plan at index {index} (catalog has {catalog_size})"
        )
        self.index = index
        self.catalog_size = catalog_size


class PhaseTransitionError(IntervalEngineError):
    """A transition was requested from a phase that has none."""


class SessionClosedError(IntervalEngineError):
    """An intent was sent to a controller that has already been closed."""
