"""Session history package."""

from .records import SessionIdFactory, SessionRecord
from .store import SessionHistory, SessionRepository
from .json_store import JsonSessionRepository

__all__ = [
    "SessionIdFactory",
    "SessionRecord",
    "SessionHistory",
    "SessionRepository",
    "JsonSessionRepository",
]
