"""SQLAlchemy ORM models for FlipFocus."""

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class SessionRow(Base):
    """One completed session, stored with the wire format's fields.

    ``position`` keeps insertion order.  ``session_id`` holds the record id
    as text because stored ids may be numbers or strings; together with
    ``id_is_numeric`` it round-trips the original type, so ``5`` and ``"5"``
    may both appear.
    """

    __tablename__ = "sessions"

    position = Column(Integer, primary_key=True, autoincrement=False)
    session_id = Column(String(64), nullable=False)
    id_is_numeric = Column(Boolean, nullable=False, default=True)
    title = Column(String(255), nullable=False)
    session_type = Column(String(64), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    completed_at = Column(String(40), nullable=False)    # ISO-8601
    completed_date = Column(String(32), nullable=False)  # display string

    def __repr__(self) -> str:
        return (
            f"<SessionRow #{self.position} id={self.session_id} "
            f"type={self.session_type}>"
        )
