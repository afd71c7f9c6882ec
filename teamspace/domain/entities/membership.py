"""
OrganizationMembership Entity

Links a user profile to an organization with a role.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow
from .enums import MembershipRole

if TYPE_CHECKING:
    from .organization import Organization


class OrganizationMembership(SQLModel, table=True):
    """
    OrganizationMembership entity - join between user and organization.

    Business Rules:
    - One user can be member of multiple organizations
    - (organization_id, user_id) must be unique; the unique index is what
      settles concurrent invite acceptances
    - Lifetime bounded by both parents
    """

    __tablename__ = "organization_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True
    )
    user_id: UUID = Field(nullable=False, index=True)

    role: MembershipRole = Field(nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    organization: "Organization" = Relationship(back_populates="memberships")

    __table_args__ = (
        Index(
            "idx_membership_organization_user",
            "organization_id",
            "user_id",
            unique=True,
        ),
    )
