"""
User repository — the only code that reads or writes ``users`` rows.

The store handle is injected at construction; nothing here holds a
module-level connection.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User

logger = logging.getLogger(__name__)


class UserNameTaken(Exception):
    """Raised when an insert collides with an existing user name."""

    def __init__(self, user_name: str) -> None:
        super().__init__(f"User name already in use: {user_name}")
        self.user_name = user_name


class UserRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user_by_username(self, user_name: str) -> User | None:
        result = await self.db.execute(select(User).where(User.user_name == user_name))
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: int | str) -> User | None:
        """Fetch by primary key. A malformed id raises ``ValueError``."""
        return await self.db.get(User, int(user_id))

    async def add_user(
        self,
        user_name: str,
        first_name: str,
        last_name: str,
        password_hash: str,
        email: str | None = None,
        *,
        is_admin: bool = False,
    ) -> User:
        """Insert a new user and return it with its assigned id.

        Uniqueness is enforced by the ``users.user_name`` constraint, so two
        racing inserts cannot both succeed; the loser gets ``UserNameTaken``.
        """
        user = User(
            user_name=user_name,
            first_name=first_name,
            last_name=last_name,
            password=password_hash,
            email=email or None,
            is_admin=is_admin,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.info("Rejected duplicate user name %r", user_name)
            raise UserNameTaken(user_name) from exc
        await self.db.refresh(user)
        return user

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())
