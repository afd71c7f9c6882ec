import pytest
from httpx import AsyncClient

from teamspace.domain.entities import UserProfile


@pytest.mark.asyncio
async def test_login_sends_magic_link_to_callback(client: AsyncClient, auth_provider):
    response = await client.post("/auth/login", json={"email": "a@x.com"})

    assert response.status_code == 200
    assert response.json()["success"] is True
    email, redirect_to = auth_provider.sent_links[-1]
    assert email == "a@x.com"
    assert redirect_to.endswith("/auth/callback")


@pytest.mark.asyncio
async def test_login_rejects_invalid_email(client: AsyncClient, auth_provider):
    response = await client.post("/auth/login", json={"email": "not-an-email"})

    assert response.status_code == 422
    assert auth_provider.sent_links == []


@pytest.mark.asyncio
async def test_login_reports_provider_outage(client: AsyncClient, auth_provider):
    auth_provider.unavailable = True

    response = await client.post("/auth/signup", json={"email": "a@x.com"})

    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "MAGIC_LINK_FAILED",
        "message": "Authentication service unavailable",
    }


@pytest.mark.asyncio
async def test_callback_with_magic_link_starts_session(
    client: AsyncClient, db_session, auth_provider
):
    identity = auth_provider.register_user("a@x.com")
    token_hash = auth_provider.issue_magic_link(identity)

    response = await client.get(
        "/auth/callback", params={"token": token_hash, "type": "magiclink"}
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/team"
    assert "sb-access-token=" in response.headers["set-cookie"]

    profile = await db_session.get(UserProfile, identity.id)
    assert profile is not None
    assert profile.email == "a@x.com"


@pytest.mark.asyncio
async def test_callback_with_code_starts_session(client: AsyncClient, auth_provider):
    identity = auth_provider.register_user("a@x.com")
    code = auth_provider.issue_code(identity)

    response = await client.get("/auth/callback", params={"code": code})

    assert response.status_code == 303
    assert response.headers["location"] == "/team"


@pytest.mark.asyncio
async def test_callback_with_bad_token_returns_to_login(client: AsyncClient):
    response = await client.get(
        "/auth/callback", params={"token": "bogus", "type": "magiclink"}
    )

    assert response.status_code == 303
    assert response.headers["location"].startswith("/auth/login?error=")
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_callback_without_credentials_returns_to_login(client: AsyncClient):
    response = await client.get("/auth/callback")

    assert response.status_code == 303
    assert response.headers["location"] == "/auth/login"


@pytest.mark.asyncio
async def test_confirm_verifies_any_token_type(client: AsyncClient, auth_provider):
    identity = auth_provider.register_user("a@x.com")
    token_hash = auth_provider.issue_magic_link(identity)

    response = await client.get(
        "/auth/confirm", params={"token_hash": token_hash, "type": "signup"}
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/team"


@pytest.mark.asyncio
async def test_logout_clears_session_cookie(client: AsyncClient):
    response = await client.post("/auth/logout")

    assert response.status_code == 303
    assert response.headers["location"] == "/auth/login"
    assert response.headers["set-cookie"].startswith('sb-access-token=""')


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
