"""
Validate Invite Token Use Case

Looks up an invite by token and checks that it can still be accepted.
"""

from libs.result import Error, Result, Return
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.domain.base import utcnow
from teamspace.domain.entities import InviteStatus

from .dtos import InviteDetails


class ValidateInviteTokenUseCase:
    """
    Use case for validating an invite token.

    Business Rules:
    - Unknown token -> INVITE_NOT_FOUND
    - Status other than pending -> INVITE_ALREADY_PROCESSED (status echoed)
    - expires_at reached -> INVITE_EXPIRED, whatever the stored status says
    - Read only; an expired invite is not transitioned here
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[InviteDetails]:
        """
        Execute validate invite token use case.

        Args:
            token: Invite token from the link

        Returns:
            Result with InviteDetails, or Error
        """
        async with self.uow:
            invite = await self.uow.invites.get_by_token(token)

            if invite is None:
                return Return.err(Error("INVITE_NOT_FOUND", "Invite not found"))

            if invite.status != InviteStatus.pending:
                return Return.err(
                    Error(
                        "INVITE_ALREADY_PROCESSED",
                        f"This invite has already been {invite.status.value}",
                        details={"status": invite.status.value},
                    )
                )

            if invite.is_expired(utcnow()):
                return Return.err(Error("INVITE_EXPIRED", "This invite has expired"))

            organization = await self.uow.organizations.get_by_id(
                invite.organization_id
            )

            return Return.ok(
                InviteDetails(
                    id=str(invite.id),
                    email=invite.email,
                    role=invite.role.value,
                    status=invite.status.value,
                    expires_at=invite.expires_at.isoformat(),
                    organization_id=str(invite.organization_id),
                    organization_name=organization.name if organization else "",
                )
            )
