from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from teamspace.app.repositories.invite_repository import IInviteRepository
from teamspace.domain.entities import InviteStatus, OrganizationInvite


class InviteRepository(IInviteRepository):
    """Invite repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token(self, token: str) -> Optional[OrganizationInvite]:
        """Get invite by token"""
        stmt = select(OrganizationInvite).where(OrganizationInvite.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[OrganizationInvite]:
        """Get pending invite by organization and email"""
        stmt = select(OrganizationInvite).where(
            OrganizationInvite.organization_id == organization_id,
            OrganizationInvite.email == email,
            OrganizationInvite.status == InviteStatus.pending,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_pending_by_email(self, email: str) -> List[OrganizationInvite]:
        """Get all pending invites addressed to an email"""
        stmt = (
            select(OrganizationInvite)
            .where(
                OrganizationInvite.email == email,
                OrganizationInvite.status == InviteStatus.pending,
            )
            .order_by(OrganizationInvite.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invite: OrganizationInvite) -> OrganizationInvite:
        """Create a new invite"""
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite

    async def update(self, invite: OrganizationInvite) -> OrganizationInvite:
        """Update existing invite"""
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite
