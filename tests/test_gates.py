"""Tests for the logged-in / admin gates and the welcome page."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.user import User
from app.repositories.sessions import SessionData, SessionStore

COOKIE = settings.SESSION_COOKIE_NAME


async def _login(client: AsyncClient, user_name: str, password: str):
    return await client.post("/login", data={"userName": user_name, "password": password})


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/", "/dashboard", "/benefits"])
async def test_anonymous_is_sent_to_login(async_client: AsyncClient, path: str):
    resp = await async_client.get(path)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_unknown_cookie_is_anonymous(async_client: AsyncClient):
    async_client.cookies.set(COOKIE, "does-not-exist")
    resp = await async_client.get("/dashboard")
    assert resp.status_code == 302


@pytest.mark.asyncio
async def test_welcome_page_shows_user(async_client: AsyncClient, alice: User):
    await _login(async_client, "alice", "Sup3rSecr3t!")
    resp = await async_client.get("/")
    assert resp.status_code == 200
    assert "Welcome Alice Tester" in resp.text
    assert f'id="user-id">{alice.id}<' in resp.text


@pytest.mark.asyncio
async def test_non_admin_cannot_see_benefits(async_client: AsyncClient, alice: User):
    await _login(async_client, "alice", "Sup3rSecr3t!")
    resp = await async_client.get("/benefits")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_admin_sees_benefits(async_client: AsyncClient, admin: User, alice: User):
    await _login(async_client, "boss", "Adm1nPassw0rd")
    resp = await async_client.get("/benefits")
    assert resp.status_code == 200
    assert "Employee Benefits" in resp.text
    assert "alice" in resp.text


@pytest.mark.asyncio
async def test_admin_gate_rejects_vanished_user(
    async_client: AsyncClient, db_session: AsyncSession
):
    """A session pointing at a user id that is not in the store gets the login redirect."""
    session = await SessionStore(db_session).regenerate(SessionData(), user_id=9999)
    async_client.cookies.set(COOKIE, session.session_id)
    resp = await async_client.get("/benefits")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/login"

    # The welcome page treats the stale session the same way
    resp = await async_client.get("/dashboard")
    assert resp.status_code == 302


@pytest.mark.asyncio
async def test_expired_session_is_anonymous(
    async_client: AsyncClient, db_session: AsyncSession, alice: User
):
    store = SessionStore(db_session, max_age=-60)
    session = await store.regenerate(SessionData(), user_id=alice.id)
    assert (await store.load(session.session_id)).user_id is None

    async_client.cookies.set(COOKIE, session.session_id)
    resp = await async_client.get("/dashboard")
    assert resp.status_code == 302

    assert await store.purge_expired() == 1
