"""
Accept Invite Use Case

Turns a pending invite plus a verified identity into an organization
membership, in a single transaction.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from teamspace.app.repositories.membership_repository import MembershipAlreadyExists
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.domain.base import normalize_email, utcnow
from teamspace.domain.entities import (
    Identity,
    InviteStatus,
    OrganizationMembership,
)

from .dtos import AcceptInviteResponse

logger = logging.getLogger(__name__)


class AcceptInviteUseCase:
    """
    Use case for accepting an organization invite.

    Business Rules:
    - The invite is re-read inside the transaction; earlier validation is
      not trusted
    - The identity's email must equal the invite's email
    - Accepting again for an existing member succeeds with already_member
    - Membership insert and pending -> accepted happen in the same commit
    - Losing a concurrent insert to the unique index is reported as
      already_member, not as an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, token: str, identity: Identity
    ) -> Result[AcceptInviteResponse]:
        """
        Execute accept invite use case.

        Args:
            token: Invite token
            identity: Authenticated identity from the auth provider

        Returns:
            Result with AcceptInviteResponse DTO, or Error

        Errors:
            - INVITE_NOT_FOUND: Token unknown or invite expired
            - INVITE_EMAIL_MISMATCH: Identity email differs from invite email
            - INVITE_ALREADY_PROCESSED: Invite accepted/revoked/expired for
              somebody who is not a member
            - INVITE_ACCEPT_FAILED: Data layer rejected the change
        """
        async with self.uow:
            invite = await self.uow.invites.get_by_token(token)

            if invite is None:
                return Return.err(
                    Error("INVITE_NOT_FOUND", "Invalid or expired invite")
                )

            # Rollback expires loaded rows; keep plain values for later use
            organization_id = invite.organization_id
            role = invite.role

            if normalize_email(identity.email) != normalize_email(invite.email):
                logger.warning(
                    f"Invite {token[:8]}... for {organization_id} refused: "
                    f"email mismatch for user {identity.id}"
                )
                return Return.err(
                    Error(
                        "INVITE_EMAIL_MISMATCH",
                        "This invite was sent to a different email address",
                    )
                )

            existing_membership = await self.uow.memberships.get_by_user_and_organization(
                identity.id, organization_id
            )
            if existing_membership is not None:
                if invite.status == InviteStatus.pending:
                    invite.status = InviteStatus.accepted
                    await self.uow.invites.update(invite)
                    await self.uow.commit()
                return Return.ok(
                    self._response(organization_id, already_member=True)
                )

            if invite.status != InviteStatus.pending:
                return Return.err(
                    Error(
                        "INVITE_ALREADY_PROCESSED",
                        f"This invite has already been {invite.status.value}",
                        details={"status": invite.status.value},
                    )
                )

            if invite.is_expired(utcnow()):
                return Return.err(
                    Error("INVITE_NOT_FOUND", "Invalid or expired invite")
                )

            try:
                await self.uow.memberships.create(
                    OrganizationMembership(
                        organization_id=organization_id,
                        user_id=identity.id,
                        role=role,
                    )
                )
                invite.status = InviteStatus.accepted
                await self.uow.invites.update(invite)
                await self.uow.commit()
            except MembershipAlreadyExists:
                return await self._settle_lost_race(organization_id, identity)
            except Exception as exc:
                await self.uow.rollback()
                logger.error(
                    f"Error accepting invite {token[:8]}... for organization "
                    f"{organization_id}: {exc}",
                    exc_info=True,
                )
                return Return.err(
                    Error("INVITE_ACCEPT_FAILED", "Failed to accept invite")
                )

            logger.info(
                f"User {identity.id} joined organization {organization_id} "
                f"as {role.value}"
            )
            return Return.ok(self._response(organization_id, already_member=False))

    async def _settle_lost_race(
        self, organization_id: UUID, identity: Identity
    ) -> Result[AcceptInviteResponse]:
        await self.uow.rollback()

        membership = await self.uow.memberships.get_by_user_and_organization(
            identity.id, organization_id
        )
        if membership is None:
            logger.error(
                f"Membership conflict for user {identity.id} in "
                f"{organization_id} but no membership found"
            )
            return Return.err(Error("INVITE_ACCEPT_FAILED", "Failed to accept invite"))

        logger.info(
            f"Concurrent acceptance: user {identity.id} already joined "
            f"{organization_id}"
        )
        return Return.ok(self._response(organization_id, already_member=True))

    @staticmethod
    def _response(
        organization_id: UUID, already_member: bool
    ) -> AcceptInviteResponse:
        return AcceptInviteResponse(
            organization_id=str(organization_id),
            already_member=already_member,
        )
