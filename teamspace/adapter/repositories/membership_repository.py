from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from teamspace.app.repositories.membership_repository import (
    IMembershipRepository,
    MembershipAlreadyExists,
)
from teamspace.domain.entities import (
    Organization,
    OrganizationMembership,
    OrganizationSummary,
)


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_organization(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[OrganizationMembership]:
        """Get membership by user and organization"""
        stmt = select(OrganizationMembership).where(
            OrganizationMembership.user_id == user_id,
            OrganizationMembership.organization_id == organization_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_organization_id(
        self, organization_id: UUID
    ) -> List[OrganizationMembership]:
        """Get all memberships for an organization, oldest first"""
        stmt = (
            select(OrganizationMembership)
            .where(OrganizationMembership.organization_id == organization_id)
            .order_by(OrganizationMembership.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_organizations_for_user(
        self, user_id: UUID
    ) -> List[OrganizationSummary]:
        """Get the organizations a user belongs to, oldest membership first"""
        stmt = (
            select(Organization, OrganizationMembership.role)
            .join(
                OrganizationMembership,
                OrganizationMembership.organization_id == Organization.id,
            )
            .where(OrganizationMembership.user_id == user_id)
            .order_by(OrganizationMembership.created_at)
        )
        result = await self.session.exec(stmt)
        return [
            OrganizationSummary(
                id=organization.id,
                name=organization.name,
                role=role,
                created_at=organization.created_at,
            )
            for organization, role in result.all()
        ]

    async def create(
        self, membership: OrganizationMembership
    ) -> OrganizationMembership:
        """Create a new membership, raising MembershipAlreadyExists on conflict"""
        self.session.add(membership)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise MembershipAlreadyExists(
                membership.organization_id, membership.user_id
            ) from exc
        await self.session.refresh(membership)
        return membership
