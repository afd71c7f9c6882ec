from datetime import timedelta
from uuid import uuid4

import pytest

from teamspace.app.use_cases.invites import CreateInviteUseCase
from teamspace.domain.base import utcnow
from teamspace.domain.entities import InviteStatus, MembershipRole, UserProfile
from tests.fixtures.factories import make_identity, make_invite, make_membership


@pytest.fixture
def inviter():
    return make_identity("owner@x.com")


@pytest.fixture
def organization_id():
    return uuid4()


@pytest.mark.asyncio
async def test_admin_creates_invite(mock_uow, inviter, organization_id):
    mock_uow.memberships.get_by_user_and_organization.return_value = make_membership(
        organization_id, inviter.id, MembershipRole.admin
    )

    result = await CreateInviteUseCase(mock_uow, expiry_days=3).execute(
        inviter, organization_id, " Guest@X.com ", "member"
    )

    assert result.is_ok()
    assert result.value.email == "guest@x.com"
    assert result.value.role == "member"
    assert len(result.value.token) >= 32

    invite = mock_uow.invites.create.call_args[0][0]
    assert invite.organization_id == organization_id
    assert invite.status == InviteStatus.pending
    assert invite.invited_by == inviter.id
    remaining = invite.expires_at - utcnow()
    assert timedelta(days=2, hours=23) < remaining <= timedelta(days=3)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_tokens_are_unique(mock_uow, inviter, organization_id):
    mock_uow.memberships.get_by_user_and_organization.return_value = make_membership(
        organization_id, inviter.id, MembershipRole.owner
    )
    use_case = CreateInviteUseCase(mock_uow)

    first = await use_case.execute(inviter, organization_id, "a@x.com", "member")
    second = await use_case.execute(inviter, organization_id, "b@x.com", "member")

    assert first.value.token != second.value.token


@pytest.mark.asyncio
async def test_invalid_role_is_rejected(mock_uow, inviter, organization_id):
    result = await CreateInviteUseCase(mock_uow).execute(
        inviter, organization_id, "a@x.com", "superuser"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_ROLE"
    mock_uow.invites.create.assert_not_called()


@pytest.mark.asyncio
async def test_non_member_cannot_invite(mock_uow, inviter, organization_id):
    result = await CreateInviteUseCase(mock_uow).execute(
        inviter, organization_id, "a@x.com", "member"
    )

    assert result.error.code == "NOT_A_MEMBER"


@pytest.mark.asyncio
async def test_plain_member_cannot_invite(mock_uow, inviter, organization_id):
    mock_uow.memberships.get_by_user_and_organization.return_value = make_membership(
        organization_id, inviter.id, MembershipRole.member
    )

    result = await CreateInviteUseCase(mock_uow).execute(
        inviter, organization_id, "a@x.com", "member"
    )

    assert result.error.code == "INSUFFICIENT_ROLE"
    mock_uow.invites.create.assert_not_called()


@pytest.mark.asyncio
async def test_existing_member_cannot_be_invited(mock_uow, inviter, organization_id):
    guest_id = uuid4()
    mock_uow.profiles.get_by_email.return_value = UserProfile(id=guest_id, email="a@x.com")
    mock_uow.memberships.get_by_user_and_organization.side_effect = [
        make_membership(organization_id, inviter.id, MembershipRole.owner),
        make_membership(organization_id, guest_id),
    ]

    result = await CreateInviteUseCase(mock_uow).execute(
        inviter, organization_id, "a@x.com", "member"
    )

    assert result.error.code == "ALREADY_MEMBER"


@pytest.mark.asyncio
async def test_live_pending_invite_blocks_duplicate(mock_uow, inviter, organization_id):
    mock_uow.memberships.get_by_user_and_organization.return_value = make_membership(
        organization_id, inviter.id, MembershipRole.owner
    )
    mock_uow.invites.get_pending_by_organization_and_email.return_value = make_invite(
        organization_id=organization_id
    )

    result = await CreateInviteUseCase(mock_uow).execute(
        inviter, organization_id, "a@x.com", "member"
    )

    assert result.error.code == "INVITE_ALREADY_EXISTS"
    mock_uow.invites.create.assert_not_called()


@pytest.mark.asyncio
async def test_stale_pending_invite_is_expired_and_replaced(
    mock_uow, inviter, organization_id
):
    mock_uow.memberships.get_by_user_and_organization.return_value = make_membership(
        organization_id, inviter.id, MembershipRole.owner
    )
    stale = make_invite(
        organization_id=organization_id, expires_at=utcnow() - timedelta(days=1)
    )
    mock_uow.invites.get_pending_by_organization_and_email.return_value = stale

    result = await CreateInviteUseCase(mock_uow).execute(
        inviter, organization_id, "a@x.com", "admin"
    )

    assert result.is_ok()
    assert stale.status == InviteStatus.expired
    mock_uow.invites.update.assert_awaited_once_with(stale)
    assert result.value.token != stale.token
