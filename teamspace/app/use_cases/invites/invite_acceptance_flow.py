"""
Invite Acceptance Flow

Sequences token validation, identity resolution, profile bootstrap and
membership reconciliation, and decides the single terminal outcome of an
invite request.

    ViewingInvite -> [VerifyingCredential] -> [ResolvingIdentity]
                  -> [ReconcilingMembership] -> Terminal

Every terminal state is returned as a value (ControlTransfer, RenderError or
RenderInvite); nothing is raised to redirect.
"""

import logging
from typing import Optional
from urllib.parse import quote

from libs.result import Error, Result, Return
from teamspace.app.services.auth_provider import IAuthProvider
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.app.use_cases.auth import (
    EnsureUserProfileUseCase,
    MagicLinkResponse,
    RequestCredentials,
    ResolveIdentityUseCase,
    SendMagicLinkUseCase,
)
from teamspace.domain.base import normalize_email
from teamspace.domain.entities import AuthSession, Identity

from .accept_invite_use_case import AcceptInviteUseCase
from .dtos import (
    ControlTransfer,
    FlowOutcome,
    InviteViewContext,
    RenderError,
    RenderInvite,
)
from .validate_invite_token_use_case import ValidateInviteTokenUseCase

logger = logging.getLogger(__name__)

JOINED_MESSAGE = "Successfully joined the organization!"
ALREADY_MEMBER_MESSAGE = "You were already a member of this organization"
ACCEPT_FAILED_MESSAGE = "Failed to accept invite"
CHECK_EMAIL_MESSAGE = "Check your email for a sign-in link!"


def invite_location(token: str, error: Optional[str] = None) -> str:
    location = "/invite/" + quote(token, safe="")
    if error:
        location += "?error=" + quote(error, safe="")
    return location


def team_location(organization_id: str, success: Optional[str] = None) -> str:
    location = f"/team/{organization_id}"
    if success:
        location += "?success=" + quote(success, safe="")
    return location


def render_error(error: Error) -> RenderError:
    if error.code == "INVITE_NOT_FOUND":
        status_code = 404
    else:
        status_code = 400
    return RenderError(
        status_code=status_code,
        code=error.code,
        message=error.message,
        details=error.details,
    )


class InviteAcceptanceFlow:
    """
    Orchestrates the invite pages and actions.

    Dependencies are passed in per request so tests can substitute fakes for
    the store and the auth provider.
    """

    def __init__(self, uow: UnitOfWork, auth_provider: IAuthProvider):
        self.uow = uow
        self.auth_provider = auth_provider

    async def view(
        self,
        token: str,
        credentials: RequestCredentials,
        error: Optional[str] = None,
    ) -> FlowOutcome:
        """Invite page: anyone with the link may look at a live invite."""
        validation = await ValidateInviteTokenUseCase(self.uow).execute(token)
        if validation.is_err():
            return render_error(validation.error)

        invite = validation.value
        identity = None
        if credentials.access_token:
            identity = await self.auth_provider.get_current_identity(
                credentials.access_token
            )

        if identity is None:
            return RenderInvite(
                context=InviteViewContext(
                    invite=invite,
                    can_accept_directly=False,
                    wrong_user=False,
                    error=error,
                )
            )

        matches = normalize_email(identity.email) == normalize_email(invite.email)
        return RenderInvite(
            context=InviteViewContext(
                invite=invite,
                can_accept_directly=matches,
                wrong_user=not matches,
                current_user_email=identity.email,
                error=error,
            )
        )

    async def accept_after_verification(
        self, token: str, credentials: RequestCredentials
    ) -> FlowOutcome:
        """Landing page of the invite magic link; accepts when possible."""
        validation = await ValidateInviteTokenUseCase(self.uow).execute(token)
        if validation.is_err():
            return render_error(validation.error)

        try:
            resolution = await ResolveIdentityUseCase(self.auth_provider).execute(
                credentials
            )
            if resolution.is_err():
                return ControlTransfer(
                    location=invite_location(token, error=resolution.error.message)
                )

            resolved = resolution.value
            if not resolved.authenticated:
                return ControlTransfer(location=invite_location(token))

            return await self._reconcile(token, resolved.identity, resolved.session)
        except Exception as exc:
            logger.error(
                f"Error accepting invite {token[:8]}...: {exc}", exc_info=True
            )
            return ControlTransfer(
                location=invite_location(token, error=ACCEPT_FAILED_MESSAGE)
            )

    async def accept(self, token: str, identity: Identity) -> FlowOutcome:
        """Accept action for a user who is already signed in."""
        try:
            return await self._reconcile(token, identity)
        except Exception as exc:
            logger.error(
                f"Error accepting invite {token[:8]}...: {exc}", exc_info=True
            )
            return ControlTransfer(
                location=invite_location(token, error=ACCEPT_FAILED_MESSAGE)
            )

    async def request_magic_link(
        self, token: str, email: Optional[str], site_url: str
    ) -> Result[MagicLinkResponse]:
        """Signup action: email a magic link that comes back to the invite."""
        if not email:
            return Return.err(Error("EMAIL_REQUIRED", "Email is required"))

        async with self.uow:
            invite = await self.uow.invites.get_by_token(token)
            # Leaving the block rolls back and expires the row
            invited_email = invite.email if invite is not None else None

        if invited_email is None or (
            normalize_email(invited_email) != normalize_email(email)
        ):
            return Return.err(
                Error("EMAIL_MISMATCH", "Email does not match the invitation")
            )

        redirect_to = site_url.rstrip("/") + invite_location(token) + "/accept"
        return await SendMagicLinkUseCase(self.auth_provider).execute(
            email, redirect_to, message=CHECK_EMAIL_MESSAGE
        )

    async def _reconcile(
        self,
        token: str,
        identity: Identity,
        session: Optional[AuthSession] = None,
    ) -> ControlTransfer:
        profile = await EnsureUserProfileUseCase(self.uow).execute(identity)
        if profile.is_err():
            logger.error(
                f"Profile bootstrap failed for {identity.id}, accepting invite anyway"
            )

        result = await AcceptInviteUseCase(self.uow).execute(token, identity)
        if result.is_err():
            logger.warning(
                f"Invite {token[:8]}... not accepted for {identity.id}: "
                f"{result.error.code}"
            )
            return ControlTransfer(
                location=invite_location(token, error=result.error.message),
                session=session,
            )

        accepted = result.value
        message = ALREADY_MEMBER_MESSAGE if accepted.already_member else JOINED_MESSAGE
        return ControlTransfer(
            location=team_location(accepted.organization_id, success=message),
            session=session,
        )
