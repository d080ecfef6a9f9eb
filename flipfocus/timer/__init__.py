"""Timer package."""

from .clock import QtClock, TICK_INTERVAL_MS
from .engine import (
    TimerEngine,
    TimerEvent,
    TimerOutcome,
    TimerPhase,
    format_clock,
)
from .presets import DEFAULT_PRESETS, PresetCatalog, PresetDuration

__all__ = [
    "TimerEngine",
    "TimerEvent",
    "TimerOutcome",
    "TimerPhase",
    "format_clock",
    "QtClock",
    "TICK_INTERVAL_MS",
    "DEFAULT_PRESETS",
    "PresetCatalog",
    "PresetDuration",
]
