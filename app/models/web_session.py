"""
Server-side session rows, keyed by the opaque id carried in the cookie.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.db.base import Base


class WebSession(Base):
    __tablename__ = "web_sessions"

    id: str = Column(String(64), primary_key=True)  # type: ignore[assignment]
    user_id: int | None = Column(  # type: ignore[assignment]
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    expires_at: datetime = Column(DateTime(timezone=True), nullable=False, index=True)  # type: ignore[assignment]
