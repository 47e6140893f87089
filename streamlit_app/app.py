"""Programme de Course — Streamlit run/walk interval player.

Run with:
    streamlit run streamlit_app/app.py

Audio (metronome click + spoken cues) plays on the machine running the
server. Set INTERVAL_AUDIO=0 to run silently.
"""

from __future__ import annotations

import logging

import streamlit as st

from interval_engine import config
from interval_engine.catalog import describe_plan
from interval_engine.exceptions import IntervalEngineError
from interval_engine.models.enums import MAX_CADENCE_BPM, MIN_CADENCE_BPM, Phase
from interval_engine.runner import SessionRunner, build_runner

from helpers import (
    catalog_frame,
    progress_ring_svg,
    start_button_label,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
# One "Running job" line per metronome beat otherwise.
logging.getLogger("apscheduler").setLevel(logging.WARNING)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Programme de Course",
    page_icon="🏃",
    layout="centered",
)


# ---------------------------------------------------------------------------
# Cached runner
# ---------------------------------------------------------------------------


@st.cache_resource
def get_runner() -> SessionRunner:
    return build_runner()


try:
    runner = get_runner()
except IntervalEngineError as exc:
    st.error(f"Configuration invalide : {exc}")
    st.stop()

_GRID_COLUMNS = 4


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def _select(index: int) -> None:
    try:
        runner.select_plan(index)
    except IntervalEngineError as exc:
        st.session_state["select_error"] = str(exc)


def _render_catalog() -> None:
    error = st.session_state.pop("select_error", None)
    if error:
        st.error(f"Séance impossible à démarrer : {error}")

    plans = runner.catalog
    for row_start in range(0, len(plans), _GRID_COLUMNS):
        cols = st.columns(_GRID_COLUMNS)
        for offset, col in enumerate(cols):
            index = row_start + offset
            if index >= len(plans):
                break
            plan = plans[index]
            with col:
                st.button(
                    f"Séance {index + 1}",
                    key=f"select_{index}",
                    on_click=_select,
                    args=(index,),
                    use_container_width=True,
                )
                st.caption(f"{describe_plan(plan)}  \n{plan.intervals.repetitions} fois")

    with st.expander("Vue d'ensemble"):
        st.dataframe(catalog_frame(plans), use_container_width=True)


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------


def _on_cadence_change() -> None:
    runner.set_cadence(st.session_state["cadence"])


@st.fragment(run_every="1s")
def _render_player() -> None:
    snapshot = runner.snapshot()
    if snapshot is None:
        st.rerun()

    st.markdown(
        f'<div style="display:flex;justify-content:center;">{progress_ring_svg(snapshot)}</div>',
        unsafe_allow_html=True,
    )

    st.slider(
        f"MÉTRONOME : {snapshot.cadence_bpm} PPM",
        min_value=MIN_CADENCE_BPM,
        max_value=MAX_CADENCE_BPM,
        step=1,
        value=snapshot.cadence_bpm,
        key="cadence",
        on_change=_on_cadence_change,
        disabled=snapshot.phase is not Phase.RUN,
    )

    start_col, reset_col = st.columns(2)
    with start_col:
        st.button(
            start_button_label(snapshot),
            key="toggle",
            on_click=runner.toggle,
            type="primary",
            use_container_width=True,
        )
    with reset_col:
        st.button(
            "RÉINITIALISER",
            key="reset",
            on_click=runner.reset,
            use_container_width=True,
        )


def _render_session(index: int) -> None:
    header_col, title_col = st.columns([1, 4])
    with header_col:
        st.button("← Retour", key="back", on_click=runner.back)
    with title_col:
        st.subheader(f"Séance {index + 1}")
    _render_player()


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

st.title("Programme de Course")

selected = runner.selected_index
if selected is None:
    _render_catalog()
else:
    _render_session(selected)
