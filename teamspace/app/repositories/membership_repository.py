from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from teamspace.domain.entities import OrganizationMembership, OrganizationSummary


class MembershipAlreadyExists(Exception):
    """Raised when the (organization, user) unique index rejects an insert"""

    def __init__(self, organization_id: UUID, user_id: UUID):
        self.organization_id = organization_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is already a member of {organization_id}")


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_organization(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[OrganizationMembership]:
        """Get membership by user and organization"""
        pass

    @abstractmethod
    async def get_by_organization_id(
        self, organization_id: UUID
    ) -> List[OrganizationMembership]:
        """Get all memberships for an organization, oldest first"""
        pass

    @abstractmethod
    async def get_organizations_for_user(
        self, user_id: UUID
    ) -> List[OrganizationSummary]:
        """Get the organizations a user belongs to, oldest membership first"""
        pass

    @abstractmethod
    async def create(
        self, membership: OrganizationMembership
    ) -> OrganizationMembership:
        """Create a new membership, raising MembershipAlreadyExists on conflict"""
        pass
