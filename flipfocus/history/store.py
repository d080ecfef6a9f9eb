"""In-memory session history with write-through persistence.

The history is the single owner of completed sessions.  Every mutation is
applied in memory first and then the whole ordered sequence is pushed to
the repository, so what is on disk always matches what is shown.
"""

from __future__ import annotations

import logging
from typing import Iterator, Protocol, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from ..errors import PersistenceUnavailableError
from .records import SessionId, SessionRecord


logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Durable storage for the ordered session list.

    Both methods raise ``PersistenceUnavailableError`` on failure.
    """

    def load(self) -> list[SessionRecord]: ...

    def save(self, records: Sequence[SessionRecord]) -> None: ...


class SessionHistory(QObject):
    """Append-only (plus delete) list of completed sessions.

    Signals
    -------
    changed()
        Emitted after every append or effective remove.
    persistence_failed(message: str)
        Emitted when the repository could not load or save.  The history
        keeps working in memory.
    """

    changed = pyqtSignal()
    persistence_failed = pyqtSignal(str)

    def __init__(
        self,
        repository: SessionRepository | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._repository = repository
        self._records: list[SessionRecord] = []

    # ── properties ────────────────────────────────────────────────────

    @property
    def is_persistent(self) -> bool:
        return self._repository is not None

    # ── lifecycle ─────────────────────────────────────────────────────

    def load(self) -> bool:
        """Replace the in-memory list with the stored one.

        A failed load detaches the repository: the rest of the process
        runs memory-only rather than overwrite data it could not read.
        """
        if self._repository is None:
            return False
        try:
            records = self._repository.load()
        except PersistenceUnavailableError as exc:
            self._repository = None
            self._report(f"Could not load session history: {exc}")
            return False
        self._records = list(records)
        logger.info("Loaded %d session(s)", len(self._records))
        self.changed.emit()
        return True

    # ── mutations ─────────────────────────────────────────────────────

    def append(self, record: SessionRecord) -> None:
        self._records.append(record)
        self._persist()
        self.changed.emit()

    def remove(self, session_id: SessionId) -> bool:
        """Delete the session with *session_id*.  Unknown ids are a no-op."""
        for index, record in enumerate(self._records):
            if record.id == session_id:
                del self._records[index]
                break
        else:
            return False
        self._persist()
        self.changed.emit()
        return True

    # ── queries ───────────────────────────────────────────────────────

    def list(self) -> list[SessionRecord]:
        """All sessions in completion order (a copy)."""
        return list(self._records)

    def recent_first(self) -> list[SessionRecord]:
        return self._records[::-1]

    def get(self, session_id: SessionId) -> SessionRecord | None:
        for record in self._records:
            if record.id == session_id:
                return record
        return None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SessionRecord]:
        return iter(list(self._records))

    # ── internal ──────────────────────────────────────────────────────

    def _persist(self) -> None:
        if self._repository is None:
            return
        try:
            self._repository.save(self._records)
        except PersistenceUnavailableError as exc:
            self._report(f"Could not save session history: {exc}")

    def _report(self, message: str) -> None:
        logger.warning(message)
        self.persistence_failed.emit(message)
