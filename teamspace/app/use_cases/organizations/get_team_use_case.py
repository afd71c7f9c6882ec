"""
Get Team Use Case

Loads an organization and its members for one of its members.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from teamspace.app.services.unit_of_work import UnitOfWork

from .dtos import MemberProfile, OrganizationInfo, TeamMember, TeamResponse


class GetTeamUseCase:
    """
    Use case for the team page.

    Business Rules:
    - Only members can see the team
    - Members are listed oldest first
    - Members without a profile are still listed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, organization_id: UUID) -> Result[TeamResponse]:
        async with self.uow:
            membership = await self.uow.memberships.get_by_user_and_organization(
                user_id, organization_id
            )
            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this organization")
                )

            organization = await self.uow.organizations.get_by_id(organization_id)
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            members = await self.uow.memberships.get_by_organization_id(organization_id)
            profiles = await self.uow.profiles.get_by_ids([m.user_id for m in members])
            profiles_by_id = {profile.id: profile for profile in profiles}

            team_members = []
            for member in members:
                profile = profiles_by_id.get(member.user_id)
                team_members.append(
                    TeamMember(
                        user_id=str(member.user_id),
                        role=member.role.value,
                        created_at=member.created_at.isoformat(),
                        user_profile=(
                            MemberProfile(
                                id=str(profile.id),
                                email=profile.email,
                                full_name=profile.full_name,
                            )
                            if profile
                            else None
                        ),
                    )
                )

            return Return.ok(
                TeamResponse(
                    current_organization=OrganizationInfo(
                        id=str(organization.id),
                        name=organization.name,
                        role=membership.role.value,
                        created_at=organization.created_at.isoformat(),
                    ),
                    user_role=membership.role.value,
                    team_members=team_members,
                )
            )
