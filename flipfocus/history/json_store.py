"""JSON-file session repository.

Stores the session list as a JSON array of wire-format objects, the same
shape the browser build kept in local storage.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Sequence

from ..errors import PersistenceUnavailableError
from ..paths import APP_SUPPORT_DIR
from .records import SessionRecord


logger = logging.getLogger(__name__)

SESSIONS_PATH = APP_SUPPORT_DIR / "sessions.json"


class JsonSessionRepository:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or SESSIONS_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[SessionRecord]:
        """Read the stored sessions; a missing file is an empty history."""
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError("expected a JSON array of sessions")
            return [SessionRecord.from_dict(item) for item in data]
        except (OSError, ValueError) as exc:
            raise PersistenceUnavailableError(f"{self._path}: {exc}") from exc

    def save(self, records: Sequence[SessionRecord]) -> None:
        payload = json.dumps([r.to_dict() for r in records], indent=2) + "\n"
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise PersistenceUnavailableError(f"{self._path}: {exc}") from exc
        logger.debug("Saved %d session(s) to %s", len(records), self._path)
