"""Session records and their storage wire format.

Wire format (one JSON object per completed session)::

    {"id": 1760790000000, "title": "Write report", "type": "Focus Time",
     "duration": 25, "completedAt": "2026-10-18T12:00:00+00:00",
     "date": "10/18/26"}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Union


SessionId = Union[int, str]

# Display-only; ``completed_date`` is always derived from ``completed_at``.
DATE_FORMAT = "%x"


@dataclass(frozen=True)
class SessionRecord:
    """Immutable evidence of one completed, titled countdown."""

    id: SessionId
    title: str
    type: str
    duration_minutes: int
    completed_at: datetime
    completed_date: date = field(init=False)

    def __post_init__(self) -> None:
        # The calendar date is always the local one, whatever offset the
        # timestamp was stored with.
        local = self.completed_at
        if local.tzinfo is not None:
            local = local.astimezone()
        object.__setattr__(self, "completed_date", local.date())

    # ── wire format ───────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "duration": self.duration_minutes,
            "completedAt": self.completed_at.isoformat(),
            "date": self.completed_date.strftime(DATE_FORMAT),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionRecord:
        """Parse one stored object.  Raises ``ValueError`` if malformed."""
        try:
            raw_id = data["id"]
            completed_at = _parse_timestamp(data["completedAt"])
            record = cls(
                id=raw_id if isinstance(raw_id, (int, str)) else str(raw_id),
                title=str(data["title"]),
                type=str(data["type"]),
                duration_minutes=int(data["duration"]),
                completed_at=completed_at,
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed session record: {data!r}") from exc
        return record


def _parse_timestamp(value: str) -> datetime:
    # ``fromisoformat`` only accepts a trailing "Z" from Python 3.11 on.
    if isinstance(value, str) and value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed


def local_now() -> datetime:
    """Timezone-aware local time."""
    return datetime.now().astimezone()


class SessionIdFactory:
    """Time-derived, strictly increasing session ids.

    Milliseconds since the epoch; bumped by one when two sessions complete
    within the same millisecond (or the wall clock steps backwards).
    """

    def __init__(self, now: Callable[[], datetime] = local_now) -> None:
        self._now = now
        self._last: int = 0

    def observe(self, existing: SessionId) -> None:
        """Never hand out an id at or below a numeric id already in use."""
        if isinstance(existing, int) and existing > self._last:
            self._last = existing

    def next_id(self, at: datetime | None = None) -> int:
        stamp = int((at or self._now()).timestamp() * 1000)
        self._last = max(stamp, self._last + 1)
        return self._last
