"""Shared test fixtures: plans, a manual clock and recording audio adapters."""

from __future__ import annotations

from typing import Callable, Iterator

import pytest

from audio_cues.base import Announcer, ToneGenerator
from audio_cues.exceptions import AudioUnavailableError
from interval_engine.clock import Clock, TimerHandle
from interval_engine.controller import SessionController
from interval_engine.models.session_plan import IntervalSet, SessionPlan


class ManualTimer(TimerHandle):
    def __init__(self, clock: "ManualClock", period_s: float, callback: Callable[[], None],
                 name: str, seq: int) -> None:
        self.clock = clock
        self.period_s = period_s
        self.callback = callback
        self.name = name
        self.seq = seq
        self.armed_at = clock.now
        self.fired = 0
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    @property
    def next_due(self) -> float:
        # Rounded so that n * (1/3) lands exactly on whole seconds.
        return round(self.armed_at + (self.fired + 1) * self.period_s, 6)

    def cancel(self) -> None:
        self._active = False


class ManualClock(Clock):
    """Deterministic clock: time only moves when a test calls ``advance``.

    Timers due at the same instant fire in the order they were armed.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []
        self._seq = 0

    def schedule_every(self, period_s, callback, name):
        self._seq += 1
        timer = ManualTimer(self, period_s, callback, name, self._seq)
        self.timers.append(timer)
        return timer

    def active_timers(self, name: str | None = None) -> list[ManualTimer]:
        return [t for t in self.timers if t.active and (name is None or t.name == name)]

    def advance(self, seconds: float) -> None:
        target = round(self.now + seconds, 6)
        while True:
            due = [t for t in self.active_timers() if t.next_due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.next_due, t.seq))
            self.now = timer.next_due
            timer.fired += 1
            timer.callback()
        self.now = target


class RecordingTone(ToneGenerator):
    def __init__(self, unavailable: bool = False) -> None:
        self.unavailable = unavailable
        self.ticks: list[float] = []
        self.opened = 0
        self.closed = 0
        self.clock: ManualClock | None = None

    def open(self) -> None:
        self.opened += 1
        if self.unavailable:
            raise AudioUnavailableError("no device")

    def tick(self) -> None:
        self.ticks.append(self.clock.now if self.clock else 0.0)

    def close(self) -> None:
        self.closed += 1


class RecordingAnnouncer(Announcer):
    def __init__(self, unavailable: bool = False) -> None:
        self.unavailable = unavailable
        self.spoken: list[str] = []
        self.opened = 0
        self.closed = 0

    def open(self) -> None:
        self.opened += 1
        if self.unavailable:
            raise AudioUnavailableError("no speech")

    def announce(self, text: str) -> None:
        self.spoken.append(text)

    def close(self) -> None:
        self.closed += 1


def make_plan(run_s: int = 30, walk_s: int = 30, reps: int = 2,
              warmup_s: int = 180, cooldown_s: int = 180) -> SessionPlan:
    return SessionPlan(
        warmup_s=warmup_s,
        cooldown_s=cooldown_s,
        intervals=IntervalSet(run_s=run_s, walk_s=walk_s, repetitions=reps),
    )


@pytest.fixture
def walk_plan() -> SessionPlan:
    """180 s warm-up, 2 x (30 s run + 30 s walk), 180 s cool-down."""
    return make_plan(run_s=30, walk_s=30, reps=2)


@pytest.fixture
def continuous_plan() -> SessionPlan:
    """180 s warm-up, one 900 s run with no walk, 180 s cool-down."""
    return make_plan(run_s=900, walk_s=0, reps=1)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def tone(clock) -> RecordingTone:
    t = RecordingTone()
    t.clock = clock
    return t


@pytest.fixture
def announcer() -> RecordingAnnouncer:
    return RecordingAnnouncer()


@pytest.fixture
def make_controller(clock, tone, announcer) -> Iterator[Callable[..., SessionController]]:
    """Build controllers on the shared manual clock; closes them afterwards."""
    created: list[SessionController] = []

    def _make(plan: SessionPlan, **kwargs) -> SessionController:
        kwargs.setdefault("tone", tone)
        kwargs.setdefault("announcer", announcer)
        controller = SessionController(plan, clock, **kwargs)
        created.append(controller)
        return controller

    yield _make
    for controller in created:
        controller.close()
