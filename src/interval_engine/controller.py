"""SessionController — drives one run/walk session second by second.

Owns the SessionRunState, the 1 Hz countdown timer, the cadence timer
(armed only while running in a RUN phase) and the audio adapters.
"""

from __future__ import annotations

import logging
from types import TracebackType

from audio_cues.base import Announcer, NullAnnouncer, NullToneGenerator, ToneGenerator
from audio_cues.exceptions import AudioUnavailableError

from interval_engine.clock import Clock, TimerHandle
from interval_engine.exceptions import SessionClosedError
from interval_engine.models.enums import COUNTDOWN_PERIOD_S, DEFAULT_CADENCE_BPM, Phase
from interval_engine.models.run_state import RunSnapshot, SessionRunState, clamp_cadence
from interval_engine.models.session_plan import SessionPlan
from interval_engine.transitions import next_phase

logger = logging.getLogger(__name__)


class SessionController:
    """Orchestrates countdown, phase transitions, metronome and spoken cues.

    Usage:
        with SessionController(plan, clock, tone, announcer) as session:
            session.start()
            ...

    All methods must be called from the thread running the clock's event
    loop; timer callbacks run there too, so no locking is needed.
    """

    def __init__(
        self,
        plan: SessionPlan,
        clock: Clock,
        tone: ToneGenerator | None = None,
        announcer: Announcer | None = None,
        cadence_bpm: int = DEFAULT_CADENCE_BPM,
    ) -> None:
        self.plan = plan
        self._clock = clock
        self._tone = tone or NullToneGenerator()
        self._announcer = announcer or NullAnnouncer()
        self._state = SessionRunState.initial(plan, cadence_bpm)
        self._countdown: TimerHandle | None = None
        self._cadence: TimerHandle | None = None
        self._audio_open = False
        self._closed = False

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start or resume. From FINISHED, restart from the warm-up."""
        self._ensure_open()
        if self._state.phase is Phase.FINISHED:
            self._reset_state()
        elif self._state.is_running:
            return
        self._open_audio()
        self._state.is_running = True
        self._arm_countdown()
        self._sync_cadence()
        logger.info(
            "Session started in %s (%ds left)",
            self._state.phase.value,
            self._state.time_left_s,
        )

    def pause(self) -> None:
        """Stop both timers, keeping phase, repetition and time left."""
        self._ensure_open()
        if not self._state.is_running:
            return
        self._state.is_running = False
        self._disarm()
        logger.info(
            "Session paused in %s (%ds left)",
            self._state.phase.value,
            self._state.time_left_s,
        )

    def toggle(self) -> None:
        """Start/pause button behaviour."""
        if self._state.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Return to the initial warm-up state, stopped."""
        self._ensure_open()
        self._reset_state()
        logger.info("Session reset")

    def set_cadence(self, bpm: int) -> None:
        """Change the metronome cadence; takes effect immediately in RUN."""
        self._ensure_open()
        clamped = clamp_cadence(bpm)
        if clamped == self._state.cadence_bpm:
            return
        self._state.cadence_bpm = clamped
        if self._cadence is not None:
            self._cadence.cancel()
            self._cadence = None
        self._sync_cadence()
        logger.debug("Cadence set to %d bpm", clamped)

    def snapshot(self) -> RunSnapshot:
        s = self._state
        return RunSnapshot(
            phase=s.phase,
            repetition=s.repetition,
            repetitions=self.plan.intervals.repetitions,
            time_left_s=s.time_left_s,
            phase_duration_s=s.phase_duration_s,
            is_running=s.is_running,
            cadence_bpm=s.cadence_bpm,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Disarm both timers and release the audio devices. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._state.is_running = False
        self._disarm()
        try:
            self._tone.close()
        finally:
            self._announcer.close()
            self._audio_open = False
        logger.info("Session closed")

    def __enter__(self) -> "SessionController":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Timer callbacks
    # ------------------------------------------------------------------

    def _on_tick(self) -> None:
        s = self._state
        if not s.is_running:
            return
        if s.time_left_s > 1:
            s.time_left_s -= 1
            logger.debug("%s: %ds left", s.phase.value, s.time_left_s)
        else:
            self._advance()
        # The transition (and its cue) is applied before the cadence
        # timer is re-evaluated.
        self._sync_cadence()
        self._check_invariants()

    def _on_cadence(self) -> None:
        if self._state.is_running and self._state.phase is Phase.RUN:
            self._tone.tick()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        s = self._state
        transition = next_phase(self.plan, s.phase, s.repetition)
        previous = s.phase
        s.phase = transition.phase
        s.repetition = transition.repetition

        if transition.phase is Phase.FINISHED:
            s.time_left_s = 0
            s.is_running = False
            self._disarm()
            logger.info("Session finished")
            return

        # A new run phase restarts the metronome from its first beat.
        if self._cadence is not None:
            self._cadence.cancel()
            self._cadence = None

        s.time_left_s = transition.duration_s
        s.phase_duration_s = transition.duration_s
        logger.info(
            "Phase %s -> %s (repetition %d/%d, %ds)",
            previous.value,
            transition.phase.value,
            transition.repetition,
            self.plan.intervals.repetitions,
            transition.duration_s,
        )
        if transition.cue is not None:
            self._announcer.announce(transition.cue)

    def _reset_state(self) -> None:
        self._disarm()
        self._state = SessionRunState.initial(self.plan, self._state.cadence_bpm)

    def _arm_countdown(self) -> None:
        if self._countdown is None:
            self._countdown = self._clock.schedule_every(
                COUNTDOWN_PERIOD_S, self._on_tick, name="countdown"
            )

    def _sync_cadence(self) -> None:
        """Arm the cadence timer iff running in RUN; disarm it otherwise."""
        wanted = self._state.is_running and self._state.phase is Phase.RUN
        if wanted and self._cadence is None:
            period_s = 60.0 / self._state.cadence_bpm
            self._cadence = self._clock.schedule_every(period_s, self._on_cadence, name="cadence")
        elif not wanted and self._cadence is not None:
            self._cadence.cancel()
            self._cadence = None

    def _disarm(self) -> None:
        for handle in (self._countdown, self._cadence):
            if handle is not None:
                handle.cancel()
        self._countdown = None
        self._cadence = None

    def _open_audio(self) -> None:
        """Claim the audio devices on first start; fall back to silence."""
        if self._audio_open:
            return
        self._audio_open = True
        try:
            self._tone.open()
        except AudioUnavailableError as exc:
            logger.warning("Metronome disabled: %s", exc)
            self._tone = NullToneGenerator()
        try:
            self._announcer.open()
        except AudioUnavailableError as exc:
            logger.warning("Spoken cues disabled: %s", exc)
            self._announcer = NullAnnouncer()

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("Session controller has been closed")

    def _check_invariants(self) -> None:
        s = self._state
        assert 0 <= s.time_left_s <= s.phase_duration_s, s
        assert s.phase.has_repetition or s.repetition == 0, s
        assert s.phase is not Phase.FINISHED or not s.is_running, s
