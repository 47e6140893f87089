"""Spoken cues through pyttsx3.

The pyttsx3 engine is created, driven and stopped on one dedicated
worker thread; callers only ever submit work to it.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from typing import Any

import pyttsx3

from audio_cues.base import Announcer
from audio_cues.exceptions import AudioUnavailableError

logger = logging.getLogger(__name__)

_OPEN_TIMEOUT_S = 10.0


def _voice_matches(voice: Any, locale: str) -> bool:
    """True if a pyttsx3 voice speaks *locale* (e.g. 'fr-FR' or just 'fr')."""
    language = locale.split("-")[0].lower()
    langs = []
    for lang in getattr(voice, "languages", None) or []:
        if isinstance(lang, bytes):
            lang = lang.decode("ascii", errors="ignore")
        langs.append(str(lang).lower().lstrip("\x05"))
    if any(lang.startswith(language) for lang in langs):
        return True
    voice_id = (getattr(voice, "id", "") or "").lower()
    return f"{language}_" in voice_id or f"{language}-" in voice_id or voice_id.endswith(f"/{language}")


class Pyttsx3Announcer(Announcer):
    """Announcer speaking through the platform's pyttsx3 driver."""

    def __init__(self, locale: str = "fr-FR", rate: int = 170) -> None:
        self._locale = locale
        self._rate = rate
        self._engine: Any = None
        self._executor: ThreadPoolExecutor | None = None

    @property
    def is_open(self) -> bool:
        return self._executor is not None

    def open(self) -> None:
        if self._executor is not None:
            return
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="announcer")
        try:
            executor.submit(self._init_engine).result(timeout=_OPEN_TIMEOUT_S)
        except (RuntimeError, OSError, ImportError, TimeoutError) as exc:
            executor.shutdown(wait=False)
            raise AudioUnavailableError(f"Speech backend unavailable: {exc}") from exc
        self._executor = executor

    def _init_engine(self) -> None:
        engine = pyttsx3.init()
        engine.setProperty("rate", self._rate)
        chosen = next(
            (v for v in engine.getProperty("voices") or [] if _voice_matches(v, self._locale)),
            None,
        )
        if chosen is not None:
            engine.setProperty("voice", chosen.id)
            logger.info("Speech voice: %s", getattr(chosen, "name", chosen.id))
        else:
            logger.warning("No %s voice installed; using the default voice", self._locale)
        self._engine = engine

    def announce(self, text: str) -> None:
        if self._executor is None:
            return
        self._executor.submit(self._speak, text)

    def _speak(self, text: str) -> None:
        try:
            self._engine.say(text)
            self._engine.runAndWait()
        except (RuntimeError, OSError) as exc:
            logger.warning("Could not speak %r: %s", text, exc)

    def _stop_engine(self) -> None:
        if self._engine is not None:
            try:
                self._engine.stop()
            except (RuntimeError, OSError) as exc:
                logger.debug("Speech engine stop failed: %s", exc)
            self._engine = None

    def close(self) -> None:
        executor, self._executor = self._executor, None
        if executor is None:
            return
        executor.submit(self._stop_engine)
        executor.shutdown(wait=False)
        logger.info("Speech backend released")
