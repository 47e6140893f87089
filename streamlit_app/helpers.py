"""Utility helpers bridging the Streamlit UI and the interval engine.

Pure functions for formatting, phase labels/colours, the catalog overview
table and the progress ring markup.
"""

from __future__ import annotations

import math
from typing import Sequence

import pandas as pd

from interval_engine.catalog import describe_plan
from interval_engine.models.enums import Phase
from interval_engine.models.run_state import RunSnapshot
from interval_engine.models.session_plan import SessionPlan

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_time(seconds: int) -> str:
    """Convert seconds to 'MM:SS'. e.g. 185 -> '03:05'."""
    seconds = max(0, int(seconds))
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


def format_repetition(snapshot: RunSnapshot) -> str:
    """'Répétition: 2 / 15' during run/walk, empty otherwise."""
    if not snapshot.shows_repetition:
        return ""
    return f"Répétition: {snapshot.repetition} / {snapshot.repetitions}"


def start_button_label(snapshot: RunSnapshot) -> str:
    if snapshot.phase is Phase.FINISHED:
        return "RECOMMENCER"
    return "PAUSE" if snapshot.is_running else "DÉMARRER"


# ---------------------------------------------------------------------------
# Labels and colours
# ---------------------------------------------------------------------------

PHASE_LABELS: dict[Phase, str] = {
    Phase.WARMUP: "Échauffement",
    Phase.RUN: "Course",
    Phase.WALK: "Marche",
    Phase.COOLDOWN: "Récupération",
    Phase.FINISHED: "Terminé",
}

PHASE_COLORS: dict[Phase, str] = {
    Phase.WARMUP: "#FF8C00",     # orange
    Phase.RUN: "#E74C3C",        # red
    Phase.WALK: "#2ECC71",       # green
    Phase.COOLDOWN: "#4A90D9",   # blue
    Phase.FINISHED: "#8E44AD",   # purple
}

_RING_TRACK_COLOR = "#E6E6E6"
_RING_RADIUS = 90


# ---------------------------------------------------------------------------
# Catalog overview
# ---------------------------------------------------------------------------


def catalog_frame(catalog: Sequence[SessionPlan]) -> pd.DataFrame:
    """One row per plan: run/walk seconds, repetitions, total minutes."""
    rows = [
        {
            "Séance": i + 1,
            "Description": describe_plan(plan),
            "Course (s)": plan.intervals.run_s,
            "Marche (s)": plan.intervals.walk_s,
            "Répétitions": plan.intervals.repetitions,
            "Durée (min)": round(plan.total_duration_s / 60, 1),
        }
        for i, plan in enumerate(catalog)
    ]
    return pd.DataFrame(rows).set_index("Séance")


# ---------------------------------------------------------------------------
# Progress ring
# ---------------------------------------------------------------------------


def progress_ring_svg(snapshot: RunSnapshot, size: int = 220) -> str:
    """SVG progress ring whose coloured sweep equals ``snapshot.progress``."""
    circumference = 2 * math.pi * _RING_RADIUS
    offset = circumference - snapshot.progress * circumference
    color = PHASE_COLORS.get(snapshot.phase, "#8E44AD")
    return (
        f'<svg width="{size}" height="{size}" viewBox="0 0 200 200">'
        f'<circle cx="100" cy="100" r="{_RING_RADIUS}" fill="none" '
        f'stroke="{_RING_TRACK_COLOR}" stroke-width="10"/>'
        f'<circle cx="100" cy="100" r="{_RING_RADIUS}" fill="none" '
        f'stroke="{color}" stroke-width="10" '
        f'stroke-dasharray="{circumference:.2f}" stroke-dashoffset="{offset:.2f}" '
        f'transform="rotate(-90 100 100)"/>'
        f'<text x="100" y="82" text-anchor="middle" font-size="16" fill="{color}">'
        f"{PHASE_LABELS[snapshot.phase]}</text>"
        f'<text x="100" y="118" text-anchor="middle" font-size="34" font-weight="bold">'
        f"{format_time(snapshot.time_left_s)}</text>"
        f'<text x="100" y="146" text-anchor="middle" font-size="12" fill="#666">'
        f"{format_repetition(snapshot)}</text>"
        "</svg>"
    )
