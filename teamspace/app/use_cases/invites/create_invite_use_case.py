"""
Create Invite Use Case

Handles inviting an email address to join an organization with a role.
"""

import logging
import secrets
from datetime import timedelta
from uuid import UUID

from libs.result import Error, Result, Return
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.domain.base import normalize_email, utcnow
from teamspace.domain.entities import (
    MANAGER_ROLES,
    Identity,
    InviteStatus,
    MembershipRole,
    OrganizationInvite,
)

from .dtos import CreateInviteResponse

logger = logging.getLogger(__name__)

DEFAULT_INVITE_EXPIRY_DAYS = 7


class CreateInviteUseCase:
    """
    Use case for inviting users to join an organization.

    Business Rules:
    - Only owner/admin can invite users
    - Role must be a valid MembershipRole
    - Existing members cannot be invited
    - One live pending invite per (organization, email); a stale pending
      invite is marked expired and replaced
    - Token is cryptographically secure and never changes
    """

    def __init__(self, uow: UnitOfWork, expiry_days: int = DEFAULT_INVITE_EXPIRY_DAYS):
        self.uow = uow
        self.expiry_days = expiry_days

    async def execute(
        self, inviter: Identity, organization_id: UUID, email: str, role: str
    ) -> Result[CreateInviteResponse]:
        """
        Execute create invite use case.

        Args:
            inviter: Authenticated identity sending the invite
            organization_id: Target organization ID
            email: Email address to invite
            role: Role to assign (owner/admin/member)

        Returns:
            Result with CreateInviteResponse DTO, or Error
        """
        async with self.uow:
            try:
                membership_role = MembershipRole(role)
            except ValueError:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {role}. Must be one of: owner, admin, member",
                    )
                )

            memberships = self.uow.memberships
            inviter_membership = await memberships.get_by_user_and_organization(
                inviter.id, organization_id
            )

            if inviter_membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this organization")
                )

            if inviter_membership.role not in MANAGER_ROLES:
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "Only owners and admins can invite users",
                    )
                )

            email = normalize_email(email)

            existing_profile = await self.uow.profiles.get_by_email(email)
            if existing_profile:
                existing_membership = (
                    await self.uow.memberships.get_by_user_and_organization(
                        existing_profile.id, organization_id
                    )
                )
                if existing_membership:
                    return Return.err(
                        Error(
                            "ALREADY_MEMBER",
                            "User is already a member of this organization",
                        )
                    )

            now = utcnow()
            pending_invite = await self.uow.invites.get_pending_by_organization_and_email(
                organization_id, email
            )
            if pending_invite:
                if not pending_invite.is_expired(now):
                    return Return.err(
                        Error(
                            "INVITE_ALREADY_EXISTS",
                            "A pending invitation already exists for this email",
                        )
                    )
                pending_invite.status = InviteStatus.expired
                await self.uow.invites.update(pending_invite)

            invite = OrganizationInvite(
                organization_id=organization_id,
                email=email,
                role=membership_role,
                token=secrets.token_urlsafe(32),
                invited_by=inviter.id,
                expires_at=now + timedelta(days=self.expiry_days),
            )

            invite = await self.uow.invites.create(invite)

            await self.uow.commit()

            logger.info(
                f"User {inviter.id} invited {email} to {organization_id} "
                f"as {membership_role.value}"
            )

            return Return.ok(
                CreateInviteResponse(
                    invite_id=str(invite.id),
                    token=invite.token,
                    email=invite.email,
                    role=invite.role.value,
                    expires_at=invite.expires_at.isoformat(),
                )
            )
