"""Tests for SessionRunState, RunSnapshot and cadence clamping."""

from __future__ import annotations

import pytest

from interval_engine.models.enums import Phase
from interval_engine.models.run_state import RunSnapshot, SessionRunState, clamp_cadence

from conftest import make_plan


def _snapshot(**overrides) -> RunSnapshot:
    values = dict(
        phase=Phase.RUN, repetition=1, repetitions=4, time_left_s=15,
        phase_duration_s=60, is_running=True, cadence_bpm=170,
    )
    values.update(overrides)
    return RunSnapshot(**values)


class TestClampCadence:
    @pytest.mark.parametrize("bpm,expected", [(0, 165), (164, 165), (165, 165), (172, 172), (180, 180), (999, 180)])
    def test_clamps_to_range(self, bpm, expected) -> None:
        assert clamp_cadence(bpm) == expected


class TestSessionRunState:
    def test_initial_is_stopped_warmup(self) -> None:
        state = SessionRunState.initial(make_plan(warmup_s=120))
        assert state.phase is Phase.WARMUP
        assert state.repetition == 0
        assert state.time_left_s == state.phase_duration_s == 120
        assert state.is_running is False

    def test_initial_clamps_cadence(self) -> None:
        assert SessionRunState.initial(make_plan(), cadence_bpm=150).cadence_bpm == 165


class TestRunSnapshot:
    def test_progress_fraction(self) -> None:
        assert _snapshot().progress == pytest.approx(0.25)

    def test_progress_when_finished(self) -> None:
        assert _snapshot(phase=Phase.FINISHED, time_left_s=0, phase_duration_s=180).progress == 0.0

    def test_progress_guards_zero_duration(self) -> None:
        assert _snapshot(time_left_s=0, phase_duration_s=0).progress == 0.0

    @pytest.mark.parametrize(
        "phase,shown",
        [(Phase.WARMUP, False), (Phase.RUN, True), (Phase.WALK, True),
         (Phase.COOLDOWN, False), (Phase.FINISHED, False)],
    )
    def test_repetition_shown_only_in_run_walk(self, phase, shown) -> None:
        assert _snapshot(phase=phase).shows_repetition is shown
