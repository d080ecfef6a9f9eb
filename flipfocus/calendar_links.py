"""Google Calendar deep links for focus sessions.

A link opens the calendar's "new event" form pre-filled with the session:

    title    "{title} ({type})"
    details  "Completed a {minutes} minute {type} session"
    dates    START/END in UTC, ``YYYYMMDDTHHMMSSZ``
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from urllib.parse import quote

from .history.records import SessionRecord, local_now
from .timer.presets import PresetDuration


GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"


def _format_utc(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def event_url(title: str, session_type: str, minutes: int, start: datetime) -> str:
    """Template link for an event of *minutes* starting at *start*."""
    end = start + timedelta(minutes=minutes)
    text = quote(f"{title} ({session_type})", safe="")
    details = quote(f"Completed a {minutes} minute {session_type} session", safe="")
    dates = f"{_format_utc(start)}/{_format_utc(end)}"
    return (
        f"{GOOGLE_CALENDAR_URL}?action=TEMPLATE"
        f"&text={text}&details={details}&dates={dates}"
    )


def session_event_url(record: SessionRecord) -> str:
    """Link for a completed session, starting at its completion time."""
    return event_url(
        record.title, record.type, record.duration_minutes, record.completed_at,
    )


def planned_event_url(
    title: str,
    preset: PresetDuration,
    now: datetime | None = None,
) -> str:
    """Link for a session that has not finished yet, starting now.

    Raises ``ValueError`` for a blank title.
    """
    if not title.strip():
        raise ValueError("a session title is required")
    return event_url(title, preset.label, preset.minutes, now or local_now())
