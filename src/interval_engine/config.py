"""Environment-variable-based configuration for the interval runner."""

from __future__ import annotations

import os
from pathlib import Path

from interval_engine.models.enums import (
    CUE_LOCALE as _DEFAULT_LOCALE,
    DEFAULT_CADENCE_BPM as _DEFAULT_CADENCE,
)
from interval_engine.models.run_state import clamp_cadence


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() not in ("0", "false", "no", "off", "")


AUDIO_ENABLED: bool = _flag("INTERVAL_AUDIO", "1")
CUE_LOCALE: str = os.environ.get("INTERVAL_CUE_LOCALE", _DEFAULT_LOCALE)
SPEECH_RATE: int = int(os.environ.get("INTERVAL_SPEECH_RATE", "170"))
CLICK_VOLUME: float = float(os.environ.get("INTERVAL_CLICK_VOLUME", "1.0"))
CLICK_FREQUENCY: float = float(os.environ.get("INTERVAL_CLICK_FREQUENCY", "880"))
DEFAULT_CADENCE_BPM: int = clamp_cadence(
    int(os.environ.get("INTERVAL_DEFAULT_CADENCE", str(_DEFAULT_CADENCE)))
)
CATALOG_PATH: Path | None = (
    Path(os.environ["INTERVAL_CATALOG_PATH"]).expanduser()
    if os.environ.get("INTERVAL_CATALOG_PATH")
    else None
)
LOG_LEVEL: str = os.environ.get("INTERVAL_LOG_LEVEL", "INFO").upper()
