"""
UserProfile Entity

Local profile for an identity issued by the auth provider.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class UserProfile(SQLModel, table=True):
    """
    UserProfile entity - one row per provider user id.

    Business Rules:
    - id is the auth provider's user id, never generated locally
    - Created lazily on first successful authentication
    - Existence check always precedes insert
    """

    __tablename__ = "user_profiles"

    id: UUID = Field(primary_key=True)
    email: str = Field(max_length=255, index=True)
    full_name: Optional[str] = Field(default=None, max_length=255)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
