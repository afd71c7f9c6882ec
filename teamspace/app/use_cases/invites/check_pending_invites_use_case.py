"""
Check Pending Invites Use Case

Accepts every live invite addressed to the signed-in user's email.
"""

import logging
from typing import List

from libs.result import Error, Result, Return
from teamspace.app.repositories.membership_repository import MembershipAlreadyExists
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.domain.base import normalize_email, utcnow
from teamspace.domain.entities import (
    Identity,
    InviteStatus,
    OrganizationMembership,
)

from .dtos import AcceptedInvite, CheckPendingInvitesResponse

logger = logging.getLogger(__name__)


class CheckPendingInvitesUseCase:
    """
    Use case for sweeping pending invites after sign-in.

    Business Rules:
    - Only pending, unexpired invites for the identity's email are touched
    - Existing memberships are kept; their invites are just marked accepted
    - accepted_count counts new memberships only
    - Everything is committed together or not at all
    - Losing a membership insert to a concurrent sweep reruns the sweep once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[CheckPendingInvitesResponse]:
        async with self.uow:
            try:
                accepted = await self._sweep(identity)
            except MembershipAlreadyExists as exc:
                await self.uow.rollback()
                # A concurrent sweep committed first; its rows are visible now
                logger.info(
                    f"Pending invite sweep for {identity.id} raced, retrying: {exc}"
                )
                try:
                    accepted = await self._sweep(identity)
                except MembershipAlreadyExists as exc:
                    await self.uow.rollback()
                    logger.warning(
                        f"Pending invite sweep for {identity.id} raced twice: {exc}"
                    )
                    return Return.err(
                        Error(
                            "INVITE_ACCEPT_CONFLICT",
                            "Invites changed while they were being accepted, please retry",
                        )
                    )

            return Return.ok(
                CheckPendingInvitesResponse(
                    accepted_count=sum(1 for a in accepted if not a.already_member),
                    invites=accepted,
                )
            )

    async def _sweep(self, identity: Identity) -> List[AcceptedInvite]:
        now = utcnow()
        invites = await self.uow.invites.get_pending_by_email(
            normalize_email(identity.email)
        )

        accepted = []
        for invite in invites:
            if invite.is_expired(now):
                continue

            membership = await self.uow.memberships.get_by_user_and_organization(
                identity.id, invite.organization_id
            )
            if membership is None:
                await self.uow.memberships.create(
                    OrganizationMembership(
                        organization_id=invite.organization_id,
                        user_id=identity.id,
                        role=invite.role,
                    )
                )

            invite.status = InviteStatus.accepted
            await self.uow.invites.update(invite)

            organization = await self.uow.organizations.get_by_id(
                invite.organization_id
            )
            accepted.append(
                AcceptedInvite(
                    invite_id=str(invite.id),
                    organization_id=str(invite.organization_id),
                    organization_name=organization.name if organization else "",
                    role=invite.role.value,
                    already_member=membership is not None,
                )
            )

        await self.uow.commit()
        return accepted
