from datetime import timedelta
from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import func, select

from teamspace.domain.base import utcnow
from teamspace.domain.entities import (
    InviteStatus,
    MembershipRole,
    Organization,
    OrganizationInvite,
    OrganizationMembership,
)
from tests.fixtures.api_helpers import create_invite, create_organization
from tests.fixtures.fake_auth_provider import auth_headers


async def membership_count(db_session, organization_id: str, user_id: UUID) -> int:
    stmt = select(func.count()).select_from(OrganizationMembership).where(
        OrganizationMembership.organization_id == UUID(organization_id),
        OrganizationMembership.user_id == user_id,
    )
    result = await db_session.exec(stmt)
    return result.one()


async def invite_status(db_session, token: str) -> InviteStatus:
    result = await db_session.exec(
        select(OrganizationInvite).where(OrganizationInvite.token == token)
    )
    invite = result.one()
    await db_session.refresh(invite)
    return invite.status


@pytest.fixture
def owner(auth_provider):
    return auth_provider.register_user("owner@acme.com", full_name="Olive Owner")


@pytest.mark.asyncio
async def test_magic_link_acceptance_joins_organization(
    client: AsyncClient, db_session, auth_provider, owner
):
    """New user follows the emailed link and lands on the team page, signed in"""
    owner_headers = auth_headers(auth_provider, owner)
    organization_id = await create_organization(client, owner_headers, "Acme Corp")
    token = await create_invite(client, owner_headers, organization_id, "a@x.com", "admin")

    invitee = auth_provider.register_user("a@x.com", full_name="Ann")
    token_hash = auth_provider.issue_magic_link(invitee)

    response = await client.get(
        f"/invite/{token}/accept", params={"token": token_hash, "type": "magiclink"}
    )

    assert response.status_code == 303
    assert response.headers["location"].startswith(
        f"/team/{organization_id}?success=Successfully%20joined"
    )
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("sb-access-token=")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()

    assert await membership_count(db_session, organization_id, invitee.id) == 1
    assert await invite_status(db_session, token) == InviteStatus.accepted

    team = await client.get(
        f"/team/{organization_id}", headers=auth_headers(auth_provider, invitee)
    )
    assert team.status_code == 200
    body = team.json()
    assert body["current_organization"]["name"] == "Acme Corp"
    assert body["user_role"] == "admin"
    members = {m["user_id"]: m for m in body["team_members"]}
    assert members[str(owner.id)]["role"] == "owner"
    assert members[str(invitee.id)]["user_profile"]["email"] == "a@x.com"
    assert members[str(invitee.id)]["user_profile"]["full_name"] == "Ann"


@pytest.mark.asyncio
async def test_accepting_twice_keeps_one_membership(
    client: AsyncClient, db_session, auth_provider, owner
):
    owner_headers = auth_headers(auth_provider, owner)
    organization_id = await create_organization(client, owner_headers, "Acme Corp")
    token = await create_invite(client, owner_headers, organization_id, "a@x.com")

    invitee = auth_provider.register_user("a@x.com")
    headers = auth_headers(auth_provider, invitee)

    first = await client.post(f"/invite/{token}/accept", headers=headers)
    second = await client.post(f"/invite/{token}/accept", headers=headers)

    assert first.status_code == 303
    assert "Successfully%20joined" in first.headers["location"]
    assert second.status_code == 303
    assert second.headers["location"] == (
        f"/team/{organization_id}"
        "?success=You%20were%20already%20a%20member%20of%20this%20organization"
    )
    assert await membership_count(db_session, organization_id, invitee.id) == 1


@pytest.mark.asyncio
async def test_unauthenticated_accept_page_redirects_to_invite(
    client: AsyncClient, auth_provider, owner
):
    owner_headers = auth_headers(auth_provider, owner)
    organization_id = await create_organization(client, owner_headers, "Acme Corp")
    token = await create_invite(client, owner_headers, organization_id, "a@x.com")

    response = await client.get(f"/invite/{token}/accept")

    assert response.status_code == 303
    assert response.headers["location"] == f"/invite/{token}"
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_rejected_magic_link_redirects_with_error(
    client: AsyncClient, db_session, auth_provider, owner
):
    owner_headers = auth_headers(auth_provider, owner)
    organization_id = await create_organization(client, owner_headers, "Acme Corp")
    token = await create_invite(client, owner_headers, organization_id, "a@x.com")

    response = await client.get(
        f"/invite/{token}/accept", params={"token": "used-or-forged", "type": "magiclink"}
    )

    assert response.status_code == 303
    assert response.headers["location"] == (
        f"/invite/{token}?error=Invalid%20or%20expired%20magic%20link"
    )
    assert await invite_status(db_session, token) == InviteStatus.pending


@pytest.mark.asyncio
async def test_expired_invite_renders_error(client: AsyncClient, db_session, auth_provider):
    organization = Organization(name="Acme Corp")
    db_session.add(organization)
    db_session.add(
        OrganizationInvite(
            organization_id=organization.id,
            email="a@x.com",
            role=MembershipRole.member,
            token="expired1",
            expires_at=utcnow() - timedelta(hours=1),
        )
    )
    await db_session.commit()

    invitee = auth_provider.register_user("a@x.com")
    token_hash = auth_provider.issue_magic_link(invitee)

    response = await client.get(
        "/invite/expired1/accept", params={"token": token_hash, "type": "magiclink"}
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": {"code": "INVITE_EXPIRED", "message": "This invite has expired"}
    }
    # The magic link was never spent
    assert token_hash in auth_provider.one_time_tokens
    assert await invite_status(db_session, "expired1") == InviteStatus.pending


@pytest.mark.asyncio
async def test_unknown_invite_is_not_found(client: AsyncClient):
    response = await client.get("/invite/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "INVITE_NOT_FOUND"


@pytest.mark.asyncio
async def test_wrong_user_cannot_accept(
    client: AsyncClient, db_session, auth_provider, owner
):
    owner_headers = auth_headers(auth_provider, owner)
    organization_id = await create_organization(client, owner_headers, "Acme Corp")
    token = await create_invite(client, owner_headers, organization_id, "a@x.com")

    intruder = auth_provider.register_user("b@x.com")
    headers = auth_headers(auth_provider, intruder)

    view = await client.get(f"/invite/{token}", headers=headers)
    assert view.status_code == 200
    assert view.json()["wrong_user"] is True
    assert view.json()["can_accept_directly"] is False
    assert view.json()["current_user_email"] == "b@x.com"

    response = await client.post(f"/invite/{token}/accept", headers=headers)

    assert response.status_code == 303
    assert response.headers["location"].startswith(f"/invite/{token}?error=")
    assert await membership_count(db_session, organization_id, intruder.id) == 0
    assert await invite_status(db_session, token) == InviteStatus.pending


@pytest.mark.asyncio
async def test_view_after_acceptance_reports_processed(
    client: AsyncClient, auth_provider, owner
):
    owner_headers = auth_headers(auth_provider, owner)
    organization_id = await create_organization(client, owner_headers, "Acme Corp")
    token = await create_invite(client, owner_headers, organization_id, "a@x.com")
    invitee = auth_provider.register_user("a@x.com")
    await client.post(f"/invite/{token}/accept", headers=auth_headers(auth_provider, invitee))

    response = await client.get(f"/invite/{token}")

    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "INVITE_ALREADY_PROCESSED",
        "message": "This invite has already been accepted",
        "details": {"status": "accepted"},
    }


@pytest.mark.asyncio
async def test_signed_out_accept_action_requires_login(client: AsyncClient):
    response = await client.post(f"/invite/{uuid4().hex}/accept")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_invite_signup_sends_link_back_to_invite(
    client: AsyncClient, auth_provider, owner
):
    owner_headers = auth_headers(auth_provider, owner)
    organization_id = await create_organization(client, owner_headers, "Acme Corp")
    token = await create_invite(client, owner_headers, organization_id, "a@x.com")

    response = await client.post(f"/invite/{token}/signup", json={"email": "A@x.com"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Check your email for a sign-in link!",
    }
    email, redirect_to = auth_provider.sent_links[-1]
    assert email == "A@x.com"
    assert redirect_to.endswith(f"/invite/{token}/accept")


@pytest.mark.asyncio
async def test_invite_signup_rejects_other_email(client: AsyncClient, auth_provider, owner):
    owner_headers = auth_headers(auth_provider, owner)
    organization_id = await create_organization(client, owner_headers, "Acme Corp")
    token = await create_invite(client, owner_headers, organization_id, "a@x.com")

    response = await client.post(f"/invite/{token}/signup", json={"email": "b@x.com"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "EMAIL_MISMATCH"
    assert auth_provider.sent_links == []
