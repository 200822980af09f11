"""
User model — credentials and the admin flag.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    # UNIQUE makes insert-if-absent atomic at the store level
    user_name: str = Column(String(20), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    first_name: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    last_name: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    password: str = Column(String(128), nullable=False)  # type: ignore[assignment]
    email: str | None = Column(String(320), nullable=True)  # type: ignore[assignment]
    is_admin: bool = Column(  # type: ignore[assignment]
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
    )
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
