"""
Organization Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel


class OrganizationResponse(BaseModel):
    """Organization as returned by create/update"""

    id: str
    name: str
    created_at: str


class OrganizationInfo(BaseModel):
    """An organization the current user belongs to, with their role"""

    id: str
    name: str
    role: str
    created_at: str


class MemberProfile(BaseModel):
    """Profile details shown next to a member"""

    id: str
    email: str
    full_name: Optional[str] = None


class TeamMember(BaseModel):
    """One membership row, enriched with the member's profile when known"""

    user_id: str
    role: str
    created_at: str
    user_profile: Optional[MemberProfile] = None


class TeamResponse(BaseModel):
    """Response for get team use case"""

    current_organization: OrganizationInfo
    user_role: str
    team_members: List[TeamMember]
