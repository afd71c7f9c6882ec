"""
Teamspace Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    InviteStatus,
    MembershipRole,
    MANAGER_ROLES,
)

# Export all entities
from .identity import AuthSession, Identity
from .invite import OrganizationInvite
from .membership import OrganizationMembership
from .organization import Organization, OrganizationSummary
from .user_profile import UserProfile

__all__ = [
    # Enums
    "InviteStatus",
    "MembershipRole",
    "MANAGER_ROLES",
    # Entities
    "Organization",
    "OrganizationSummary",
    "OrganizationMembership",
    "OrganizationInvite",
    "UserProfile",
    # Per-request values
    "Identity",
    "AuthSession",
]
