"""Timer state machine for FlipFocus.

States
------
IDLE        Not counting down.  Either at the preset's full duration or
            paused part-way (``remaining`` below the full duration).
RUNNING     Counting down, one second per clock tick.
COMPLETED   Transient.  Entered when ``remaining`` hits 0; the completion
            bundle fires and the engine is back in IDLE before ``tick``
            returns.

Transitions
-----------
IDLE → RUNNING               (start / toggle, only with a non-blank title)
RUNNING → IDLE               (toggle = pause, keeps ``remaining``)
RUNNING → COMPLETED → IDLE   (last tick; ``remaining`` refilled)
Any → IDLE                   (reset / select_preset, ``remaining`` refilled)

Every control returns a ``TimerEvent`` so callers can branch on the
outcome.  The same information is emitted as Qt signals for widgets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from ..history.records import SessionIdFactory, SessionRecord, local_now
from .clock import ClockSource, QtClock
from .presets import PresetCatalog, PresetDuration


logger = logging.getLogger(__name__)


# ── enums / events ────────────────────────────────────────────────────────


class TimerPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class TimerOutcome(Enum):
    NOOP = "noop"
    REJECTED = "rejected"
    STARTED = "started"
    PAUSED = "paused"
    RESET = "reset"
    PRESET_SELECTED = "preset_selected"
    TITLE_CHANGED = "title_changed"
    TICKED = "ticked"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TimerEvent:
    """Result of one engine action.

    ``record`` is only set for a COMPLETED outcome with a titled session.
    """

    outcome: TimerOutcome
    remaining: int
    record: SessionRecord | None = None


class CueRequester(Protocol):
    def request(self) -> None: ...


def format_clock(seconds: int) -> str:
    """``MM:SS`` as shown on the flip cards (minutes may exceed 59)."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Countdown state machine with a guarded start and a completion bundle.

    Signals
    -------
    remaining_changed(remaining_seconds: int)
        Emitted whenever ``remaining`` changes (tick, reset, preset).
    phase_changed(new_phase: TimerPhase)
        Emitted on every IDLE/RUNNING transition.
    session_completed(record: SessionRecord)
        Emitted after a titled countdown finishes.
    start_rejected()
        Emitted when start is refused because the title is blank.
    """

    remaining_changed = pyqtSignal(int)
    phase_changed = pyqtSignal(object)
    session_completed = pyqtSignal(object)
    start_rejected = pyqtSignal()

    def __init__(
        self,
        catalog: PresetCatalog | None = None,
        parent: QObject | None = None,
        *,
        clock: ClockSource | None = None,
        cues: CueRequester | None = None,
        now: Callable[[], datetime] = local_now,
    ) -> None:
        super().__init__(parent)

        self._catalog = catalog if catalog is not None else PresetCatalog()
        self._clock: ClockSource = clock if clock is not None else QtClock(self)
        self._cues = cues
        self._now = now
        self._ids = SessionIdFactory(now)

        self._phase: TimerPhase = TimerPhase.IDLE
        self._preset: PresetDuration = self._catalog.default
        self._remaining: int = self._preset.seconds
        self._title: str = ""

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> TimerPhase:
        return self._phase

    @property
    def catalog(self) -> PresetCatalog:
        return self._catalog

    @property
    def active_preset(self) -> PresetDuration:
        return self._preset

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def total_duration(self) -> int:
        return self._preset.seconds

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current countdown."""
        elapsed = self.total_duration - self._remaining
        return max(0.0, min(1.0, elapsed / self.total_duration))

    @property
    def is_running(self) -> bool:
        return self._phase == TimerPhase.RUNNING

    @property
    def is_paused(self) -> bool:
        """IDLE part-way through a countdown."""
        return self._phase == TimerPhase.IDLE and self._remaining < self.total_duration

    @property
    def title(self) -> str:
        return self._title

    @property
    def can_start(self) -> bool:
        return bool(self._title.strip())

    @property
    def ids(self) -> SessionIdFactory:
        return self._ids

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def select_preset(self, preset: PresetDuration | str) -> TimerEvent:
        """Switch presets.  Stops a running countdown and refills the clock.

        Raises ``UnknownPresetError`` if *preset* is not in the catalog.
        """
        chosen = self._catalog.resolve(preset)
        self._clock.stop()
        self._preset = chosen
        self._remaining = chosen.seconds
        self._set_phase(TimerPhase.IDLE)
        self.remaining_changed.emit(self._remaining)
        return TimerEvent(TimerOutcome.PRESET_SELECTED, self._remaining)

    def set_title(self, title: str) -> TimerEvent:
        self._title = title
        return TimerEvent(TimerOutcome.TITLE_CHANGED, self._remaining)

    def start(self) -> TimerEvent:
        """Begin (or resume) counting down.  Only valid with a title."""
        if self._phase == TimerPhase.RUNNING:
            return TimerEvent(TimerOutcome.NOOP, self._remaining)
        if not self.can_start:
            logger.debug("Start rejected: no task title")
            self.start_rejected.emit()
            return TimerEvent(TimerOutcome.REJECTED, self._remaining)
        self._set_phase(TimerPhase.RUNNING)
        self._clock.start(self.tick)
        return TimerEvent(TimerOutcome.STARTED, self._remaining)

    def pause(self) -> TimerEvent:
        if self._phase != TimerPhase.RUNNING:
            return TimerEvent(TimerOutcome.NOOP, self._remaining)
        self._clock.stop()
        self._set_phase(TimerPhase.IDLE)
        return TimerEvent(TimerOutcome.PAUSED, self._remaining)

    def toggle(self) -> TimerEvent:
        """Pause when running, otherwise start (subject to the title guard)."""
        if self._phase == TimerPhase.RUNNING:
            return self.pause()
        return self.start()

    def reset(self) -> TimerEvent:
        """Stop and refill the clock for the active preset."""
        self._clock.stop()
        self._remaining = self._preset.seconds
        self._set_phase(TimerPhase.IDLE)
        self.remaining_changed.emit(self._remaining)
        return TimerEvent(TimerOutcome.RESET, self._remaining)

    def tick(self) -> TimerEvent:
        """Advance one second.  Ticks outside RUNNING are ignored."""
        if self._phase != TimerPhase.RUNNING or self._remaining <= 0:
            return TimerEvent(TimerOutcome.NOOP, self._remaining)

        self._remaining -= 1
        if self._remaining > 0:
            self.remaining_changed.emit(self._remaining)
            return TimerEvent(TimerOutcome.TICKED, self._remaining)
        return self._finish()

    def close(self) -> None:
        """Tear down: release the clock registration."""
        self._clock.stop()
        if self._phase == TimerPhase.RUNNING:
            self._phase = TimerPhase.IDLE

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _finish(self) -> TimerEvent:
        self._clock.stop()
        self._phase = TimerPhase.COMPLETED

        # ── completion bundle: cue first, then the record ─────────────
        if self._cues is not None:
            self._cues.request()
        record = self._make_record() if self.can_start else None

        # ── back to IDLE before anyone hears about it ─────────────────
        self._remaining = self._preset.seconds
        self._set_phase(TimerPhase.IDLE)
        self.remaining_changed.emit(self._remaining)

        if record is None:
            logger.info("Countdown finished without a title; nothing recorded")
        else:
            logger.info(
                "Session completed: %r (%s, %d min)",
                record.title, record.type, record.duration_minutes,
            )
            self.session_completed.emit(record)
        return TimerEvent(TimerOutcome.COMPLETED, self._remaining, record)

    def _make_record(self) -> SessionRecord:
        completed_at = self._now()
        return SessionRecord(
            id=self._ids.next_id(completed_at),
            title=self._title,
            type=self._preset.label,
            duration_minutes=self._preset.minutes,
            completed_at=completed_at,
        )

    def _set_phase(self, new_phase: TimerPhase) -> None:
        if new_phase == self._phase:
            return
        logger.debug("Timer phase %s -> %s", self._phase.value, new_phase.value)
        self._phase = new_phase
        self.phase_changed.emit(new_phase)
