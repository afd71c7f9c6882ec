"""
Update Organization Use Case

Renames an organization.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.domain.entities import MANAGER_ROLES, Identity

from .dtos import OrganizationResponse


class UpdateOrganizationUseCase:
    """
    Use case for renaming organizations.

    Business Rules:
    - Only owner/admin can rename
    - Name is 1..100 characters
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, organization_id: UUID, name: str
    ) -> Result[OrganizationResponse]:
        name = (name or "").strip()
        if not name or len(name) > 100:
            return Return.err(
                Error("INVALID_NAME", "Organization name must be 1 to 100 characters")
            )

        async with self.uow:
            membership = await self.uow.memberships.get_by_user_and_organization(
                identity.id, organization_id
            )

            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this organization")
                )

            if membership.role not in MANAGER_ROLES:
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "Only owners and admins can update the organization",
                    )
                )

            organization = await self.uow.organizations.get_by_id(organization_id)
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            organization.name = name
            organization = await self.uow.organizations.update(organization)

            await self.uow.commit()

            return Return.ok(
                OrganizationResponse(
                    id=str(organization.id),
                    name=organization.name,
                    created_at=organization.created_at.isoformat(),
                )
            )
