import pytest
from unittest.mock import AsyncMock, MagicMock

from teamspace.app.services.auth_provider import IAuthProvider


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.invites = MagicMock()
    uow.invites.get_by_token = AsyncMock(return_value=None)
    uow.invites.get_pending_by_organization_and_email = AsyncMock(return_value=None)
    uow.invites.get_pending_by_email = AsyncMock(return_value=[])
    uow.invites.create = AsyncMock(side_effect=lambda invite: invite)
    uow.invites.update = AsyncMock(side_effect=lambda invite: invite)

    uow.organizations = MagicMock()
    uow.organizations.get_by_id = AsyncMock(return_value=None)
    uow.organizations.create = AsyncMock(side_effect=lambda organization: organization)
    uow.organizations.update = AsyncMock(side_effect=lambda organization: organization)

    uow.memberships = MagicMock()
    uow.memberships.get_by_user_and_organization = AsyncMock(return_value=None)
    uow.memberships.get_by_organization_id = AsyncMock(return_value=[])
    uow.memberships.get_organizations_for_user = AsyncMock(return_value=[])
    uow.memberships.create = AsyncMock(side_effect=lambda membership: membership)

    uow.profiles = MagicMock()
    uow.profiles.get_by_id = AsyncMock(return_value=None)
    uow.profiles.get_by_ids = AsyncMock(return_value=[])
    uow.profiles.get_by_email = AsyncMock(return_value=None)
    uow.profiles.create = AsyncMock(side_effect=lambda profile: profile)

    return uow


@pytest.fixture
def mock_auth_provider():
    provider = MagicMock(spec=IAuthProvider)
    provider.verify_one_time_token = AsyncMock()
    provider.get_current_identity = AsyncMock(return_value=None)
    provider.send_magic_link = AsyncMock(return_value=None)
    provider.exchange_code_for_session = AsyncMock()
    return provider
