"""
NodeGoat session service — application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `api/`, `repositories/`, `models/`, and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.router import web_router
from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.headers import register_security_headers
from app.core.rate_limit import limiter
from app.core.security import get_password_hash_async
from app.db.base import Base
from app.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from app.models.allocation import Allocation  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.web_session import WebSession  # noqa: F401
from app.repositories.sessions import SessionStore
from app.repositories.users import UserNameTaken, UserRepository

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


async def seed_admin(users: UserRepository) -> User | None:
    """Create the default admin account unless it already exists."""
    if await users.get_user_by_username(settings.FIRST_ADMIN_USERNAME) is not None:
        return None
    try:
        admin = await users.add_user(
            settings.FIRST_ADMIN_USERNAME,
            "Node Goat",
            "Admin",
            await get_password_hash_async(settings.FIRST_ADMIN_PASSWORD),
            is_admin=True,
        )
    except UserNameTaken:
        # Another worker seeded it first
        return None
    logger.info(
        "Default admin created: %s (password: <redacted>)",
        settings.FIRST_ADMIN_USERNAME,
    )
    return admin


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    async with async_session_factory() as session:
        await seed_admin(UserRepository(session))
        purged = await SessionStore(session).purge_expired()
        if purged:
            logger.info("Purged %d expired sessions", purged)

    logger.info("🚀 %s v%s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Login, signup and session handling for the NodeGoat demo",
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # slowapi looks the limiter up on app.state
    application.state.limiter = limiter

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    # helmet-style response headers
    register_security_headers(application)

    application.include_router(web_router)

    return application


app = create_app()
