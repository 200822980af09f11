"""
Session endpoints — login, signup, logout and the welcome page.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse, Response

from app.api.deps import (
    get_allocation_repository,
    get_current_session,
    get_session_store,
    get_user_repository,
    login_form,
    require_login,
    signup_form,
)
from app.core.config import settings
from app.core.exceptions import LoginRequired
from app.core.rate_limit import limiter
from app.core.security import get_password_hash_async, verify_password_async
from app.core.templating import render
from app.repositories.allocations import AllocationRepository
from app.repositories.sessions import SessionData, SessionStore
from app.repositories.users import UserNameTaken, UserRepository
from app.schemas.user import SIGNUP_ERROR_FIELDS, LoginForm, SignupForm, UserRead

router = APIRouter(tags=["session"])
logger = logging.getLogger(__name__)

_GENERIC_LOGIN_ERROR = "Invalid username or password"


def _set_session_cookie(response: Response, session: SessionData) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.session_id or "",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.SESSION_MAX_AGE_SECONDS,
    )


def _login_page(request: Request, user_name: str = "", error: str = ""):
    return render(
        request,
        "login.html",
        {"userName": user_name, "password": "", "loginError": error},
    )


def _signup_page(request: Request, form: SignupForm | None = None, errors: dict | None = None):
    ctx = dict.fromkeys(SIGNUP_ERROR_FIELDS, "")
    ctx.update(errors or {})
    ctx["userName"] = form.userName if form else ""
    ctx["email"] = form.email if form else ""
    ctx["password"] = ""
    return render(request, "signup.html", ctx)


# ── Login ───────────────────────────────────────────────────────────
@router.get("/login")
async def display_login_page(request: Request):
    return _login_page(request)


@router.post("/login")
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def handle_login_request(
    request: Request,
    form: LoginForm = Depends(login_form),
    session: SessionData = Depends(get_current_session),
    users: UserRepository = Depends(get_user_repository),
    store: SessionStore = Depends(get_session_store),
):
    """Authenticate and redirect admins to /benefits, everyone else to /dashboard."""
    user = await users.get_user_by_username(form.userName)
    if user is None:
        logger.info("Login failed: unknown user name %r", form.userName)
        error = _GENERIC_LOGIN_ERROR if settings.LOGIN_GENERIC_ERRORS else "Invalid username"
        return _login_page(request, form.userName, error)

    if not await verify_password_async(form.password, user.password):
        logger.info("Login failed: wrong password for %r", form.userName)
        error = _GENERIC_LOGIN_ERROR if settings.LOGIN_GENERIC_ERRORS else "Invalid password"
        return _login_page(request, form.userName, error)

    new_session = await store.regenerate(session, user_id=user.id)
    logger.info("User %r logged in", user.user_name)

    response = RedirectResponse(
        url="/benefits" if user.is_admin else "/dashboard",
        status_code=status.HTTP_302_FOUND,
    )
    _set_session_cookie(response, new_session)
    return response


# ── Logout ──────────────────────────────────────────────────────────
@router.get("/logout")
async def display_logout_page(
    session: SessionData = Depends(get_current_session),
    store: SessionStore = Depends(get_session_store),
):
    await store.destroy(session)
    if session.user_id is not None:
        logger.info("User %s logged out", session.user_id)
    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


# ── Signup ──────────────────────────────────────────────────────────
@router.get("/signup")
async def display_signup_page(request: Request):
    return _signup_page(request)


@router.post("/signup")
async def handle_signup(
    request: Request,
    form: SignupForm = Depends(signup_form),
    session: SessionData = Depends(get_current_session),
    users: UserRepository = Depends(get_user_repository),
    allocations: AllocationRepository = Depends(get_allocation_repository),
    store: SessionStore = Depends(get_session_store),
):
    errors = form.validate_fields()
    if any(errors.values()):
        return _signup_page(request, form, errors)

    taken = {"userNameError": "User name already in use."}
    if await users.get_user_by_username(form.userName) is not None:
        return _signup_page(request, form, taken)

    password_hash = await get_password_hash_async(form.password)
    try:
        user = await users.add_user(
            form.userName,
            form.firstName,
            form.lastName,
            password_hash,
            form.email,
        )
    except UserNameTaken:
        return _signup_page(request, form, taken)
    logger.info("New user %r signed up (id=%s)", user.user_name, user.id)

    allocation = await allocations.prepare_user_data(user.id)

    new_session = await store.regenerate(session, user_id=user.id)
    response = render(
        request,
        "dashboard.html",
        {"user": UserRead.from_user(user), "allocation": allocation},
    )
    _set_session_cookie(response, new_session)
    return response


# ── Welcome / dashboard ─────────────────────────────────────────────
@router.get("/")
@router.get("/dashboard")
async def display_welcome_page(
    request: Request,
    session: SessionData = Depends(require_login),
    users: UserRepository = Depends(get_user_repository),
    allocations: AllocationRepository = Depends(get_allocation_repository),
):
    user = await users.get_user_by_id(session.user_id)  # type: ignore[arg-type]
    if user is None:
        # Stale session: the account behind it no longer exists
        raise LoginRequired()
    return render(
        request,
        "dashboard.html",
        {
            "user": UserRead.from_user(user, session.user_id),
            "allocation": await allocations.get_by_user_id(user.id),
        },
    )
