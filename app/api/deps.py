"""
FastAPI dependencies — store handles, the current session and access gates.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import LoginRequired
from app.db.session import get_db
from app.models.user import User
from app.repositories.allocations import AllocationRepository
from app.repositories.sessions import SessionData, SessionStore
from app.repositories.users import UserRepository
from app.schemas.user import LoginForm, SignupForm

logger = logging.getLogger(__name__)


# ── Repositories ────────────────────────────────────────────────────
def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_allocation_repository(db: AsyncSession = Depends(get_db)) -> AllocationRepository:
    return AllocationRepository(db)


def get_session_store(db: AsyncSession = Depends(get_db)) -> SessionStore:
    return SessionStore(db)


# ── Session ─────────────────────────────────────────────────────────
async def get_current_session(
    session_cookie: Optional[str] = Cookie(default=None, alias=settings.SESSION_COOKIE_NAME),
    store: SessionStore = Depends(get_session_store),
) -> SessionData:
    """Resolve the session cookie into a ``SessionData`` snapshot."""
    return await store.load(session_cookie)


# ── Access gates ────────────────────────────────────────────────────
async def require_login(
    session: SessionData = Depends(get_current_session),
) -> SessionData:
    """Only checks that the session carries a user id; the store is not consulted."""
    if not session.is_authenticated:
        logger.debug("Anonymous request rejected by login gate")
        raise LoginRequired()
    return session


async def require_admin(
    session: SessionData = Depends(get_current_session),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """Unknown users and non-admins are turned away the same way."""
    if not session.is_authenticated:
        raise LoginRequired()
    user = await users.get_user_by_id(session.user_id)  # type: ignore[arg-type]
    if user is None or not user.is_admin:
        logger.debug("Admin gate rejected session user %s", session.user_id)
        raise LoginRequired()
    return user


# ── Request bodies ──────────────────────────────────────────────────
def body_model(model: type[BaseModel]):
    """Build a dependency that reads ``model`` from a JSON or a form body."""

    async def _dependency(request: Request) -> BaseModel:
        if request.headers.get("content-type", "").startswith("application/json"):
            try:
                data = await request.json()
            except ValueError as exc:
                raise HTTPException(status_code=400, detail="Malformed JSON body") from exc
        else:
            data = dict(await request.form())
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise RequestValidationError(exc.errors(include_url=False)) from exc

    return _dependency


login_form = body_model(LoginForm)
signup_form = body_model(SignupForm)
