"""
Password hashing and verification (bcrypt).

bcrypt is deliberately slow, so both operations are pushed to the
threadpool to keep the event loop free.
"""

from __future__ import annotations

from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from app.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    return pwd_context.verify(plain, hashed)


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


async def verify_password_async(plain: str, hashed: str) -> bool:
    return await run_in_threadpool(verify_password, plain, hashed)


async def get_password_hash_async(plain: str) -> str:
    return await run_in_threadpool(get_password_hash, plain)
