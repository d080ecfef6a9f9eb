"""One-second clock source for the timer engine.

The engine never schedules itself.  It is handed a clock at construction
and starts / stops it as it enters and leaves RUNNING.  Any object with
``start(callback)``, ``stop()`` and ``is_active`` will do; tests use a
manual clock they step by hand.
"""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class ClockSource(Protocol):
    @property
    def is_active(self) -> bool: ...

    def start(self, callback: Callable[[], object]) -> None: ...

    def stop(self) -> None: ...


class QtClock(QObject):
    """``QTimer``-backed clock firing *callback* once per second."""

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._callback: Callable[[], object] | None = None
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def start(self, callback: Callable[[], object]) -> None:
        """(Re)register *callback*.  Restarting never leaves two timers."""
        self._callback = callback
        self._qt_timer.start()

    def stop(self) -> None:
        self._qt_timer.stop()
        self._callback = None

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()
