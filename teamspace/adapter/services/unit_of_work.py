from sqlmodel.ext.asyncio.session import AsyncSession

from teamspace.adapter.repositories.invite_repository import InviteRepository
from teamspace.adapter.repositories.membership_repository import MembershipRepository
from teamspace.adapter.repositories.organization_repository import OrganizationRepository
from teamspace.adapter.repositories.user_profile_repository import UserProfileRepository
from teamspace.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.organizations = OrganizationRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.invites = InviteRepository(self.session)
        self.profiles = UserProfileRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
