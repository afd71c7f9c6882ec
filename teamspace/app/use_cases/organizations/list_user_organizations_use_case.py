"""
List User Organizations Use Case
"""

from typing import List
from uuid import UUID

from libs.result import Result, Return
from teamspace.app.services.unit_of_work import UnitOfWork

from .dtos import OrganizationInfo


class ListUserOrganizationsUseCase:
    """Organizations the user belongs to, oldest membership first."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[OrganizationInfo]]:
        async with self.uow:
            summaries = await self.uow.memberships.get_organizations_for_user(user_id)

            return Return.ok(
                [
                    OrganizationInfo(
                        id=str(summary.id),
                        name=summary.name,
                        role=summary.role.value,
                        created_at=summary.created_at.isoformat(),
                    )
                    for summary in summaries
                ]
            )
