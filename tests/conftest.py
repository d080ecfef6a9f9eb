"""Shared pytest fixtures for FlipFocus tests."""

import os
import sys
import time

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from flipfocus.database.db import configure_engine, init_db  # noqa: E402
from flipfocus.timer.engine import TimerEngine  # noqa: E402
from flipfocus.timer.presets import PresetCatalog  # noqa: E402

from helpers import ManualClock, RecordingCues, fixed_now  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def cues():
    return RecordingCues()


@pytest.fixture
def engine(qapp, clock, cues):
    """Fresh TimerEngine on the default catalog, driven by a manual clock."""
    return TimerEngine(PresetCatalog(), clock=clock, cues=cues, now=fixed_now)


@pytest.fixture
def new_york_tz(monkeypatch):
    """Run the test with the process local time zone set to America/New_York."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
