"""Periodic timers driving the countdown and the cadence metronome.

Both timers run on one asyncio event loop, so their callbacks never
overlap and the controller needs no locking.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    """An armed periodic timer."""

    @property
    @abstractmethod
    def active(self) -> bool:
        ...

    @abstractmethod
    def cancel(self) -> None:
        """Disarm the timer. Synchronous and idempotent."""
        ...


class Clock(ABC):
    """Source of independently armed periodic timers."""

    @abstractmethod
    def schedule_every(
        self, period_s: float, callback: Callable[[], None], name: str
    ) -> TimerHandle:
        """Call *callback* every *period_s* seconds, first call one period from now."""
        ...


class _JobHandle(TimerHandle):
    def __init__(self, name: str) -> None:
        self.name = name
        self.job: Job | None = None
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        if self.job is not None:
            try:
                self.job.remove()
            except JobLookupError:
                pass
        logger.debug("Cancelled timer %s", self.name)


class SchedulerClock(Clock):
    """Clock backed by an APScheduler AsyncIOScheduler.

    The scheduler must already be started on the running event loop.
    """

    def __init__(self, scheduler: AsyncIOScheduler) -> None:
        self._scheduler = scheduler

    def schedule_every(
        self, period_s: float, callback: Callable[[], None], name: str
    ) -> TimerHandle:
        handle = _JobHandle(name)

        async def _fire() -> None:
            # The executor may have queued this run before cancel() was called.
            if handle.active:
                callback()

        handle.job = self._scheduler.add_job(
            _fire,
            "interval",
            seconds=period_s,
            name=name,
            coalesce=True,
            max_instances=1,
            misfire_grace_time=None,
        )
        logger.debug("Armed timer %s every %.3fs", name, period_s)
        return handle
