"""
Create Organization Use Case

Creates an organization and makes its creator the owner.
"""

import logging

from libs.result import Error, Result, Return
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.app.use_cases.auth import EnsureUserProfileUseCase
from teamspace.domain.entities import (
    Identity,
    MembershipRole,
    Organization,
    OrganizationMembership,
)

from .dtos import OrganizationResponse

logger = logging.getLogger(__name__)


class CreateOrganizationUseCase:
    """
    Use case for creating organizations.

    Business Rules:
    - The creator's profile must exist; failing to create it aborts
    - Organization and owner membership are committed together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity, name: str) -> Result[OrganizationResponse]:
        """
        Execute create organization use case.

        Args:
            identity: Authenticated creator
            name: Organization name (1..100 characters)

        Returns:
            Result with OrganizationResponse DTO, or Error
        """
        name = (name or "").strip()
        if not name:
            return Return.err(
                Error("INVALID_NAME", "Organization name is required")
            )
        if len(name) > 100:
            return Return.err(
                Error("INVALID_NAME", "Organization name is too long")
            )

        profile_result = await EnsureUserProfileUseCase(self.uow).execute(identity)
        if profile_result.is_err():
            return Return.err(profile_result.error)

        async with self.uow:
            organization = await self.uow.organizations.create(
                Organization(name=name, created_by=identity.id)
            )
            await self.uow.memberships.create(
                OrganizationMembership(
                    organization_id=organization.id,
                    user_id=identity.id,
                    role=MembershipRole.owner,
                )
            )
            await self.uow.commit()

            logger.info(f"User {identity.id} created organization {organization.id}")

            return Return.ok(
                OrganizationResponse(
                    id=str(organization.id),
                    name=organization.name,
                    created_at=organization.created_at.isoformat(),
                )
            )
