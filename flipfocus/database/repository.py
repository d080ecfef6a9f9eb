"""SQLite-backed session repository."""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from ..errors import PersistenceUnavailableError
from ..history.records import SessionRecord
from .db import get_session
from .models import SessionRow


logger = logging.getLogger(__name__)


class SqlSessionRepository:
    """Replaces the whole ``sessions`` table on every save.

    The history is small and always pushed as a complete sequence, so a
    delete-and-insert inside one transaction keeps the order exact.
    """

    def __init__(self, session_scope=get_session) -> None:
        self._session_scope = session_scope

    def load(self) -> list[SessionRecord]:
        try:
            with self._session_scope() as db:
                rows = db.scalars(
                    select(SessionRow).order_by(SessionRow.position)
                ).all()
                return [_row_to_record(row) for row in rows]
        except (SQLAlchemyError, ValueError) as exc:
            raise PersistenceUnavailableError(str(exc)) from exc

    def save(self, records: Sequence[SessionRecord]) -> None:
        try:
            with self._session_scope() as db:
                db.execute(delete(SessionRow))
                db.add_all(
                    _record_to_row(position, record)
                    for position, record in enumerate(records)
                )
        except SQLAlchemyError as exc:
            raise PersistenceUnavailableError(str(exc)) from exc
        logger.debug("Saved %d session(s) to the database", len(records))


def _record_to_row(position: int, record: SessionRecord) -> SessionRow:
    data = record.to_dict()
    return SessionRow(
        position=position,
        session_id=str(data["id"]),
        id_is_numeric=isinstance(record.id, int),
        title=data["title"],
        session_type=data["type"],
        duration_minutes=data["duration"],
        completed_at=data["completedAt"],
        completed_date=data["date"],
    )


def _row_to_record(row: SessionRow) -> SessionRecord:
    return SessionRecord.from_dict({
        "id": int(row.session_id) if row.id_is_numeric else row.session_id,
        "title": row.title,
        "type": row.session_type,
        "duration": row.duration_minutes,
        "completedAt": row.completed_at,
        "date": row.completed_date,
    })
