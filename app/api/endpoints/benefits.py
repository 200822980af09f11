"""
Benefits page — admin landing page after login.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from app.api.deps import get_user_repository, require_admin
from app.core.templating import render
from app.models.user import User
from app.repositories.users import UserRepository
from app.schemas.user import UserRead

router = APIRouter(tags=["benefits"])


@router.get("/benefits")
async def display_benefits(
    request: Request,
    admin: User = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
):
    return render(
        request,
        "benefits.html",
        {
            "admin": UserRead.from_user(admin),
            "users": [UserRead.from_user(u) for u in await users.list_users()],
        },
    )
