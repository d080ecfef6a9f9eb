"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import SessionRow
from .repository import SqlSessionRepository

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "SessionRow",
    "SqlSessionRepository",
]
