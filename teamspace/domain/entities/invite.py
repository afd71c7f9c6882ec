"""
OrganizationInvite Entity

Invitations for an email address to join an organization.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import InviteStatus, MembershipRole


class OrganizationInvite(SQLModel, table=True):
    """
    OrganizationInvite entity - authorizes one email to join one organization.

    Business Rules:
    - Created by owner/admin
    - Expires after INVITE_EXPIRY_DAYS (7 by default)
    - Token is unique, opaque and never changes
    - Status leaves pending exactly once (accepted, expired or revoked)
    - Never deleted in the normal flow
    """

    __tablename__ = "organization_invites"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True
    )
    email: str = Field(max_length=255, nullable=False, index=True)

    role: MembershipRole = Field(nullable=False)
    token: str = Field(unique=True, index=True, max_length=64)

    status: InviteStatus = Field(default=InviteStatus.pending)
    invited_by: Optional[UUID] = Field(default=None)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invite_expires_at", "expires_at"),
        Index("idx_invite_organization_email", "organization_id", "email"),
        Index("idx_invite_status", "status"),
    )

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
