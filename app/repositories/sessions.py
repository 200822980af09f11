"""
Server-side session store.

Handlers never touch ``web_sessions`` rows directly: they receive a
``SessionData`` snapshot and ask the store to regenerate or destroy it.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.web_session import WebSession


@dataclass(frozen=True)
class SessionData:
    session_id: str | None = None
    user_id: int | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = SessionData()


def _new_session_id() -> str:
    return secrets.token_urlsafe(32)


class SessionStore:
    def __init__(self, db: AsyncSession, *, max_age: int = settings.SESSION_MAX_AGE_SECONDS) -> None:
        self.db = db
        self.max_age = max_age

    async def load(self, session_id: str | None) -> SessionData:
        """Resolve a cookie value; unknown or expired ids are anonymous."""
        if not session_id:
            return ANONYMOUS
        now = datetime.now(timezone.utc)
        result = await self.db.execute(
            select(WebSession).where(
                WebSession.id == session_id,
                WebSession.expires_at > now,
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            return ANONYMOUS
        return SessionData(session_id=row.id, user_id=row.user_id)

    async def regenerate(self, current: SessionData, *, user_id: int | None) -> SessionData:
        """Drop ``current`` and issue a brand new id bound to ``user_id``."""
        if current.session_id:
            await self.db.execute(delete(WebSession).where(WebSession.id == current.session_id))
        now = datetime.now(timezone.utc)
        row = WebSession(
            id=_new_session_id(),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(seconds=self.max_age),
        )
        self.db.add(row)
        await self.db.commit()
        return SessionData(session_id=row.id, user_id=user_id)

    async def destroy(self, current: SessionData) -> None:
        if not current.session_id:
            return
        await self.db.execute(delete(WebSession).where(WebSession.id == current.session_id))
        await self.db.commit()

    async def purge_expired(self) -> int:
        """Delete every expired row; returns how many were removed."""
        now = datetime.now(timezone.utc)
        result = await self.db.execute(delete(WebSession).where(WebSession.expires_at <= now))
        await self.db.commit()
        return result.rowcount or 0
