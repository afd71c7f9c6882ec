"""
Ensure User Profile Use Case

Creates the local profile for an authenticated identity on first sight.
"""

import logging

from libs.result import Error, Result, Return
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.domain.base import normalize_email
from teamspace.domain.entities import Identity, UserProfile

from .dtos import EnsureProfileResponse

logger = logging.getLogger(__name__)


class EnsureUserProfileUseCase:
    """
    Use case for bootstrapping a user profile.

    Business Rules:
    - Existence is checked by id before inserting
    - A concurrent insert for the same id counts as existing
    - Failures are returned, not raised; callers decide whether they are fatal
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[EnsureProfileResponse]:
        """
        Execute ensure user profile use case.

        Args:
            identity: Authenticated identity from the auth provider

        Returns:
            Result with EnsureProfileResponse, or Error

        Errors:
            - PROFILE_CREATE_FAILED: Insert failed and no profile exists
        """
        async with self.uow:
            existing = await self.uow.profiles.get_by_id(identity.id)
            if existing is not None:
                return Return.ok(
                    EnsureProfileResponse(user_id=str(identity.id), created=False)
                )

            try:
                await self.uow.profiles.create(
                    UserProfile(
                        id=identity.id,
                        email=normalize_email(identity.email),
                        full_name=identity.full_name or None,
                    )
                )
                await self.uow.commit()
            except Exception as exc:
                await self.uow.rollback()

                # Another request may have created it in the meantime
                if await self.uow.profiles.get_by_id(identity.id) is not None:
                    return Return.ok(
                        EnsureProfileResponse(user_id=str(identity.id), created=False)
                    )

                logger.error(
                    f"Error creating user profile for {identity.id}: {exc}",
                    exc_info=True,
                )
                return Return.err(
                    Error("PROFILE_CREATE_FAILED", f"Failed to create user profile: {exc}")
                )

            return Return.ok(
                EnsureProfileResponse(user_id=str(identity.id), created=True)
            )
