from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from teamspace.domain.entities import UserProfile


class IUserProfileRepository(ABC):
    """User profile repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[UserProfile]:
        """Get profile by provider user ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: List[UUID]) -> List[UserProfile]:
        """Get profiles for a set of user IDs"""
        pass

    @abstractmethod
    async def create(self, profile: UserProfile) -> UserProfile:
        """Create a new profile"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserProfile]:
        """Get profile by email address"""
        pass
