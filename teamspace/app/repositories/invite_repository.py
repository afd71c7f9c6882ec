from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from teamspace.domain.entities import OrganizationInvite


class IInviteRepository(ABC):
    """Invite repository interface - application layer"""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[OrganizationInvite]:
        """Get invite by token"""
        pass

    @abstractmethod
    async def get_pending_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[OrganizationInvite]:
        """Get pending invite by organization and email"""
        pass

    @abstractmethod
    async def get_pending_by_email(self, email: str) -> List[OrganizationInvite]:
        """Get all pending invites addressed to an email"""
        pass

    @abstractmethod
    async def create(self, invite: OrganizationInvite) -> OrganizationInvite:
        """Create a new invite"""
        pass

    @abstractmethod
    async def update(self, invite: OrganizationInvite) -> OrganizationInvite:
        """Update existing invite"""
        pass
