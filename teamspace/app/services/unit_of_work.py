from abc import ABC, abstractmethod

from teamspace.app.repositories.invite_repository import IInviteRepository
from teamspace.app.repositories.membership_repository import IMembershipRepository
from teamspace.app.repositories.organization_repository import IOrganizationRepository
from teamspace.app.repositories.user_profile_repository import IUserProfileRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    organizations: IOrganizationRepository
    memberships: IMembershipRepository
    invites: IInviteRepository
    profiles: IUserProfileRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
