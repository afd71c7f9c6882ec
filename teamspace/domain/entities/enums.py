"""
Teamspace Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class MembershipRole(str, Enum):
    """User role within an organization"""

    owner = "owner"
    admin = "admin"
    member = "member"


class InviteStatus(str, Enum):
    """Invite status - only ever moves away from pending"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"
    revoked = "revoked"


MANAGER_ROLES = (MembershipRole.owner, MembershipRole.admin)
