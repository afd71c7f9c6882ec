"""
Organization Use Cases

Organization creation, renaming and team views.
"""

from .create_organization_use_case import CreateOrganizationUseCase
from .dtos import (
    MemberProfile,
    OrganizationInfo,
    OrganizationResponse,
    TeamMember,
    TeamResponse,
)
from .get_team_use_case import GetTeamUseCase
from .list_user_organizations_use_case import ListUserOrganizationsUseCase
from .update_organization_use_case import UpdateOrganizationUseCase

__all__ = [
    # Use Cases
    "CreateOrganizationUseCase",
    "UpdateOrganizationUseCase",
    "ListUserOrganizationsUseCase",
    "GetTeamUseCase",
    # DTOs - Responses
    "OrganizationResponse",
    "OrganizationInfo",
    "TeamResponse",
    "TeamMember",
    "MemberProfile",
]
