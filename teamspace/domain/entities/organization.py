"""
Organization Entity

A team that users join through memberships.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

from ..base import utcnow
from .enums import MembershipRole

if TYPE_CHECKING:
    from .membership import OrganizationMembership


class Organization(SQLModel, table=True):
    """
    Organization entity - a team workspace.

    Business Rules:
    - Name is 1..100 characters
    - Creator becomes the first owner
    - Renaming requires owner/admin role
    """

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)

    created_by: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    memberships: list["OrganizationMembership"] = Relationship(
        back_populates="organization"
    )


class OrganizationSummary(SQLModel):
    """
    An organization as seen through one user's membership.

    Membership reads that join the organization always produce this shape.
    """

    id: UUID
    name: str
    role: MembershipRole
    created_at: datetime
