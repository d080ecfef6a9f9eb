"""Tests for the QTimer-backed clock driving a real engine."""

from flipfocus.timer.clock import TICK_INTERVAL_MS, QtClock
from flipfocus.timer.engine import TimerEngine, TimerPhase
from flipfocus.timer.presets import PresetCatalog, PresetDuration

from helpers import RecordingCues, SignalCollector, fixed_now, pump_events


def _fast_engine(clock: QtClock, cues: RecordingCues) -> TimerEngine:
    return TimerEngine(
        PresetCatalog([PresetDuration("Quick", 1)]),
        clock=clock, cues=cues, now=fixed_now,
    )


class TestQtClock:

    def test_default_interval_is_one_second(self, qapp):
        assert QtClock().interval_ms == TICK_INTERVAL_MS == 1000

    def test_custom_interval(self, qapp):
        assert QtClock(interval_ms=1).interval_ms == 1

    def test_timeout_invokes_callback(self, qapp):
        clock = QtClock(interval_ms=1)
        calls = []
        clock.start(lambda: calls.append(1))
        assert clock.is_active
        assert pump_events(qapp, lambda: len(calls) >= 3)
        clock.stop()
        assert not clock.is_active

    def test_no_callback_after_stop(self, qapp):
        clock = QtClock(interval_ms=1)
        calls = []
        clock.start(lambda: calls.append(1))
        assert pump_events(qapp, lambda: len(calls) >= 1)
        clock.stop()
        seen = len(calls)
        pump_events(qapp, lambda: False, timeout_s=0.05)
        assert len(calls) == seen

    def test_restart_keeps_single_registration(self, qapp):
        clock = QtClock(interval_ms=1)
        first, second = [], []
        clock.start(lambda: first.append(1))
        clock.start(lambda: second.append(1))
        assert pump_events(qapp, lambda: len(second) >= 2)
        assert first == []
        clock.stop()


class TestEngineOnQtClock:

    def test_countdown_completes_once(self, qapp):
        cues = RecordingCues()
        clock = QtClock(interval_ms=1)
        engine = _fast_engine(clock, cues)
        completed = SignalCollector()
        engine.session_completed.connect(completed)

        engine.set_title("Write report")
        engine.start()
        assert pump_events(qapp, lambda: len(completed) >= 1)

        assert cues.requests == 1
        assert engine.phase == TimerPhase.IDLE
        assert engine.remaining == 60
        assert not clock.is_active

        pump_events(qapp, lambda: False, timeout_s=0.05)
        assert len(completed) == 1
        assert engine.remaining == 60

    def test_pause_stops_ticks(self, qapp):
        clock = QtClock(interval_ms=1)
        engine = _fast_engine(clock, RecordingCues())
        engine.set_title("Write report")
        engine.start()
        assert pump_events(qapp, lambda: engine.remaining <= 55)
        engine.toggle()
        paused_at = engine.remaining

        pump_events(qapp, lambda: False, timeout_s=0.05)
        assert engine.remaining == paused_at
        assert not clock.is_active
