"""Store failures surface as the generic error page."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from app.api.deps import get_user_repository
from app.main import app


class _BrokenUserRepository:
    async def get_user_by_username(self, user_name):
        raise OperationalError("SELECT * FROM users", {}, Exception("connection refused"))


@pytest.mark.asyncio
async def test_store_error_renders_error_page(async_client: AsyncClient):
    app.dependency_overrides[get_user_repository] = lambda: _BrokenUserRepository()
    resp = await async_client.post("/login", data={"userName": "alice", "password": "x"})
    assert resp.status_code == 500
    assert "Internal database error" in resp.text
    # No driver details leak to the client
    assert "connection refused" not in resp.text


@pytest.mark.asyncio
async def test_unknown_route_renders_error_page(async_client: AsyncClient):
    resp = await async_client.get("/no-such-page")
    assert resp.status_code == 404
    assert "Error 404" in resp.text
