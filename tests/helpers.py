"""Shared test helpers for FlipFocus."""

import time
from datetime import datetime, timezone

from flipfocus.history.records import SessionRecord
from flipfocus.timer.engine import TimerEngine, TimerPhase


FIXED_NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


def fixed_now() -> datetime:
    return FIXED_NOW


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class ManualClock:
    """Clock source stepped by hand.  Counts registrations for leak checks."""

    def __init__(self):
        self.callback = None
        self.starts = 0
        self.stops = 0

    @property
    def is_active(self) -> bool:
        return self.callback is not None

    def start(self, callback) -> None:
        self.callback = callback
        self.starts += 1

    def stop(self) -> None:
        self.callback = None
        self.stops += 1

    def advance(self, seconds: int = 1) -> None:
        """Deliver *seconds* ticks, stopping early if the clock is released."""
        for _ in range(seconds):
            if self.callback is None:
                return
            self.callback()


class RecordingCues:
    """Stands in for CueScheduler and counts requests."""

    def __init__(self):
        self.requests = 0
        self.closed = False

    def request(self) -> None:
        self.requests += 1

    def close(self) -> None:
        self.closed = True


class FakePlayer:
    def __init__(self):
        self.plays = 0
        self.closed = False

    def play(self) -> None:
        self.plays += 1

    def close(self) -> None:
        self.closed = True


class FakeScheduler:
    """Collects (delay, callback) pairs instead of arming Qt timers."""

    def __init__(self):
        self.pending: list = []

    def __call__(self, delay_ms, callback) -> None:
        self.pending.append((delay_ms, callback))

    @property
    def delays(self) -> list[int]:
        return [delay for delay, _ in self.pending]

    def fire_all(self) -> None:
        pending, self.pending = self.pending, []
        for _, callback in sorted(pending, key=lambda p: p[0]):
            callback()


class MemoryRepository:
    """In-memory SessionRepository that can be told to fail."""

    def __init__(self, records=None):
        self.stored = list(records or [])
        self.saves: list[list] = []
        self.fail_load = False
        self.fail_save = False

    def load(self):
        from flipfocus.errors import PersistenceUnavailableError
        if self.fail_load:
            raise PersistenceUnavailableError("disk on fire")
        return list(self.stored)

    def save(self, records):
        from flipfocus.errors import PersistenceUnavailableError
        if self.fail_save:
            raise PersistenceUnavailableError("read-only volume")
        self.stored = list(records)
        self.saves.append(list(records))


def make_record(session_id=1, title="Write report", session_type="Focus Time",
                minutes=25, completed_at=FIXED_NOW) -> SessionRecord:
    return SessionRecord(
        id=session_id,
        title=title,
        type=session_type,
        duration_minutes=minutes,
        completed_at=completed_at,
    )


def run_to_completion(engine: TimerEngine) -> None:
    """Tick a running engine until it drops out of RUNNING."""
    while engine.phase == TimerPhase.RUNNING:
        engine.tick()


def pump_events(qapp, until, timeout_s: float = 3.0) -> bool:
    """Process Qt events until ``until()`` is true or the timeout passes."""
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        qapp.processEvents()
        if until():
            return True
        time.sleep(0.001)
    return until()
