from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from teamspace.app.repositories.user_profile_repository import IUserProfileRepository
from teamspace.domain.entities import UserProfile


class UserProfileRepository(IUserProfileRepository):
    """User profile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[UserProfile]:
        """Get profile by provider user ID"""
        stmt = select(UserProfile).where(UserProfile.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_ids(self, user_ids: List[UUID]) -> List[UserProfile]:
        """Get profiles for a set of user IDs"""
        if not user_ids:
            return []
        stmt = select(UserProfile).where(col(UserProfile.id).in_(user_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, profile: UserProfile) -> UserProfile:
        """Create a new profile"""
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def get_by_email(self, email: str) -> Optional[UserProfile]:
        """Get profile by email address"""
        stmt = select(UserProfile).where(UserProfile.email == email)
        result = await self.session.exec(stmt)
        return result.first()
