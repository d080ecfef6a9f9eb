"""FocusController: wires the timer, cues, history and calendar together.

The controller is the only place that mutates the session history.  It
listens to the engine's ``session_completed`` signal, appends the record
(which writes through to the repository) and, if enabled, opens the
calendar link for it.
"""

from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtGui import QDesktopServices

from .audio.cues import CueScheduler, TonePlayer
from .calendar_links import planned_event_url, session_event_url
from .database.db import init_db
from .database.repository import SqlSessionRepository
from .history.json_store import JsonSessionRepository
from .history.records import SessionId, SessionRecord
from .history.store import SessionHistory, SessionRepository
from .settings import Settings
from .timer.clock import QtClock
from .timer.engine import TimerEngine, TimerEvent
from .timer.presets import PresetCatalog, PresetDuration


logger = logging.getLogger(__name__)


def _open_in_browser(url: str) -> bool:
    return QDesktopServices.openUrl(QUrl(url))


def build_repository(settings: Settings) -> SessionRepository | None:
    """Repository for the configured backend, or None if it can't start."""
    if settings.storage_backend == "json":
        return JsonSessionRepository()
    try:
        init_db()
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Session database unavailable (%s); history is memory-only", exc)
        return None
    return SqlSessionRepository()


def _catalog_from(settings: Settings) -> PresetCatalog:
    try:
        return settings.catalog()
    except (ValueError, TypeError) as exc:
        logger.warning("Invalid preset settings (%s); using the default presets", exc)
        return PresetCatalog()


class FocusController(QObject):
    """Composition root for one running application."""

    def __init__(
        self,
        settings: Settings | None = None,
        parent: QObject | None = None,
        *,
        engine: TimerEngine | None = None,
        cues: CueScheduler | None = None,
        history: SessionHistory | None = None,
        open_url: Callable[[str], bool] = _open_in_browser,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or Settings()
        self._open_url = open_url

        # ── audio ─────────────────────────────────────────────────────
        if cues is None:
            player = TonePlayer(parent=self)
            player.set_volume(self._settings.sound_volume)
            player.set_enabled(self._settings.sound_enabled)
            cues = CueScheduler(player)
        self._cues = cues

        # ── timer ─────────────────────────────────────────────────────
        if engine is None:
            engine = TimerEngine(
                _catalog_from(self._settings),
                parent=self,
                clock=QtClock(self),
                cues=self._cues,
            )
        self._engine = engine

        # ── history ───────────────────────────────────────────────────
        if history is None:
            history = SessionHistory(build_repository(self._settings), parent=self)
        self._history = history

        self._engine.session_completed.connect(self._on_session_completed)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def history(self) -> SessionHistory:
        return self._history

    @property
    def cues(self) -> CueScheduler:
        return self._cues

    @property
    def settings(self) -> Settings:
        return self._settings

    # ══════════════════════════════════════════════════════════════════
    #  USER ACTIONS
    # ══════════════════════════════════════════════════════════════════

    def load_history(self) -> bool:
        loaded = self._history.load()
        for record in self._history.list():
            self._engine.ids.observe(record.id)
        return loaded

    def select_preset(self, preset: PresetDuration | str) -> TimerEvent:
        return self._engine.select_preset(preset)

    def set_title(self, title: str) -> TimerEvent:
        return self._engine.set_title(title)

    def toggle(self) -> TimerEvent:
        return self._engine.toggle()

    def reset(self) -> TimerEvent:
        return self._engine.reset()

    def delete_session(self, session_id: SessionId) -> bool:
        removed = self._history.remove(session_id)
        if removed:
            logger.info("Deleted session %s", session_id)
        return removed

    def add_to_calendar(self, record: SessionRecord) -> bool:
        return self._open(session_event_url(record))

    def save_current_to_calendar(self) -> bool:
        """Send the in-progress title and preset to the calendar.

        Returns False (and opens nothing) when no title has been entered.
        """
        try:
            url = planned_event_url(self._engine.title, self._engine.active_preset)
        except ValueError:
            logger.warning("Calendar save rejected: no task title")
            return False
        return self._open(url)

    def shutdown(self) -> None:
        """Release the clock and the audio handle."""
        self._engine.close()
        self._cues.close()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_session_completed(self, record: SessionRecord) -> None:
        self._history.append(record)
        if self._settings.open_calendar_on_complete:
            self.add_to_calendar(record)

    def _open(self, url: str) -> bool:
        opened = bool(self._open_url(url))
        if not opened:
            logger.warning("Could not open calendar link")
        return opened
