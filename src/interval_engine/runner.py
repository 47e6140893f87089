"""SessionRunner — thread-safe bridge between a UI and the controller.

The runner owns one asyncio event loop on a daemon thread. The APScheduler
instance, both session timers and the SessionController all live on that
loop; UI intents are posted onto it and executed one at a time.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, Sequence, TypeVar

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from audio_cues.base import Announcer, NullAnnouncer, NullToneGenerator, ToneGenerator

from interval_engine import config
from interval_engine.catalog import SESSIONS, load_catalog, select_plan
from interval_engine.clock import SchedulerClock
from interval_engine.controller import SessionController
from interval_engine.models.enums import DEFAULT_CADENCE_BPM
from interval_engine.models.run_state import RunSnapshot, clamp_cadence
from interval_engine.models.session_plan import SessionPlan

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CALL_TIMEOUT_S = 5.0


class SessionRunner:
    """Hosts at most one active session and relays intents to it."""

    def __init__(
        self,
        catalog: Sequence[SessionPlan] = SESSIONS,
        tone_factory: Callable[[], ToneGenerator] = NullToneGenerator,
        announcer_factory: Callable[[], Announcer] = NullAnnouncer,
        cadence_bpm: int = DEFAULT_CADENCE_BPM,
    ) -> None:
        self.catalog = tuple(catalog)
        self._tone_factory = tone_factory
        self._announcer_factory = announcer_factory
        self._cadence_bpm = cadence_bpm
        self._controller: SessionController | None = None
        self._selected_index: int | None = None

        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever, name="session-loop", daemon=True
        )
        self._thread.start()
        self._scheduler = self._call(self._start_scheduler)
        self._clock = SchedulerClock(self._scheduler)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    @property
    def selected_index(self) -> int | None:
        return self._selected_index

    def select_plan(self, index: int) -> SessionPlan:
        """Open a fresh session for catalog entry *index*.

        Raises PlanNotFoundError before touching the current session.
        """
        plan = select_plan(index, self.catalog)

        def _select() -> None:
            self._close_controller()
            self._controller = SessionController(
                plan,
                self._clock,
                tone=self._tone_factory(),
                announcer=self._announcer_factory(),
                cadence_bpm=self._cadence_bpm,
            )
            self._selected_index = index

        self._call(_select)
        logger.info("Selected session %d", index + 1)
        return plan

    def back(self) -> None:
        """Discard the current session and return to the catalog."""
        self._call(self._close_controller)

    def start(self) -> None:
        self._call(lambda: self._require().start())

    def pause(self) -> None:
        self._call(lambda: self._require().pause())

    def toggle(self) -> None:
        self._call(lambda: self._require().toggle())

    def reset(self) -> None:
        self._call(lambda: self._require().reset())

    def set_cadence(self, bpm: int) -> None:
        """Change the cadence of the active session and remember it for the next one."""
        self._call(lambda: self._require().set_cadence(bpm))
        self._cadence_bpm = clamp_cadence(bpm)

    def snapshot(self) -> RunSnapshot | None:
        """Current state of the active session, or None on the catalog."""
        return self._call(
            lambda: self._controller.snapshot() if self._controller is not None else None
        )

    def shutdown(self) -> None:
        """Close the session, stop the scheduler and join the loop thread."""
        if not self._thread.is_alive():
            return

        def _stop() -> None:
            try:
                self._close_controller()
            finally:
                self._scheduler.shutdown(wait=False)

        try:
            self._call(_stop)
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout=_CALL_TIMEOUT_S)
            self._loop.close()
        logger.info("Session runner stopped")

    # ------------------------------------------------------------------
    # Loop-thread helpers
    # ------------------------------------------------------------------

    def _call(self, fn: Callable[[], T]) -> T:
        """Run *fn* on the loop thread and return its result (or raise)."""

        async def _run() -> T:
            return fn()

        future = asyncio.run_coroutine_threadsafe(_run(), self._loop)
        return future.result(timeout=_CALL_TIMEOUT_S)

    @staticmethod
    def _start_scheduler() -> AsyncIOScheduler:
        scheduler = AsyncIOScheduler()
        scheduler.start()
        return scheduler

    def _require(self) -> SessionController:
        if self._controller is None:
            raise LookupError("No session selected")
        return self._controller

    def _close_controller(self) -> None:
        controller, self._controller = self._controller, None
        self._selected_index = None
        if controller is not None:
            controller.close()


def build_runner() -> SessionRunner:
    """Create a runner wired with the configured catalog and audio backends."""
    from audio_cues.speech import Pyttsx3Announcer
    from audio_cues.tone import PygameToneGenerator

    catalog = load_catalog(config.CATALOG_PATH) if config.CATALOG_PATH else SESSIONS

    if config.AUDIO_ENABLED:
        def tone_factory() -> ToneGenerator:
            return PygameToneGenerator(
                frequency_hz=config.CLICK_FREQUENCY, volume=config.CLICK_VOLUME
            )

        def announcer_factory() -> Announcer:
            return Pyttsx3Announcer(locale=config.CUE_LOCALE, rate=config.SPEECH_RATE)
    else:
        logger.info("Audio disabled by configuration")
        tone_factory = NullToneGenerator
        announcer_factory = NullAnnouncer

    return SessionRunner(
        catalog,
        tone_factory=tone_factory,
        announcer_factory=announcer_factory,
        cadence_bpm=config.DEFAULT_CADENCE_BPM,
    )
