from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from config import ApplicationConfig
from libs.result import Error
from teamspace.api.error import ClientError, ServerError
from teamspace.api.utils.cookies import set_session_cookie
from teamspace.app.services.auth_provider import IAuthProvider
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.app.use_cases.auth import MagicLinkResponse, RequestCredentials
from teamspace.app.use_cases.invites import (
    ControlTransfer,
    FlowOutcome,
    InviteAcceptanceFlow,
    InviteViewContext,
    RenderError,
)
from teamspace.depends import (
    get_auth_provider,
    get_request_credentials,
    get_unit_of_work,
    require_identity,
)
from teamspace.domain.entities import Identity

router = APIRouter(prefix="/invite", tags=["Invites"])


class InviteSignupRequest(BaseModel):
    """
    Invite signup HTTP request payload

    The email must be the one the invite was sent to.
    """

    email: Optional[str] = Field(None, description="Email address the invite was sent to")


def outcome_response(outcome: FlowOutcome):
    """Turn a terminal flow outcome into exactly one HTTP response."""
    if isinstance(outcome, ControlTransfer):
        response = RedirectResponse(
            outcome.location, status_code=status.HTTP_303_SEE_OTHER
        )
        if outcome.session is not None:
            set_session_cookie(response, outcome.session)
        return response

    if isinstance(outcome, RenderError):
        raise ClientError(
            Error(outcome.code, outcome.message, details=outcome.details),
            status_code=outcome.status_code,
        )

    return outcome.context


@router.get(
    "/{token}",
    status_code=status.HTTP_200_OK,
    response_model=InviteViewContext,
)
async def view_invite(
    token: str,
    error: Optional[str] = None,
    credentials: RequestCredentials = Depends(get_request_credentials),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    View Invite

    Anyone holding the link can see a live invite. Signed-in users learn
    whether they can accept directly or are signed in as somebody else.

    Raises:
        - 400 Bad Request: INVITE_EXPIRED, INVITE_ALREADY_PROCESSED
        - 404 Not Found: INVITE_NOT_FOUND
    """
    flow = InviteAcceptanceFlow(uow, auth_provider)
    outcome = await flow.view(token, credentials, error=error)
    return outcome_response(outcome)


@router.get("/{token}/accept")
async def accept_invite_after_verification(
    token: str,
    credentials: RequestCredentials = Depends(get_request_credentials),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    Accept Invite after Magic Link

    Landing page of the invite magic link (`?token=...&type=magiclink`).
    Verifies the link, bootstraps the profile and accepts the invite, then
    redirects (303) to the team page or back to the invite with an error.
    Without any session it redirects back to the plain invite page.

    Raises:
        - 400 Bad Request: INVITE_EXPIRED, INVITE_ALREADY_PROCESSED
        - 404 Not Found: INVITE_NOT_FOUND
    """
    flow = InviteAcceptanceFlow(uow, auth_provider)
    outcome = await flow.accept_after_verification(token, credentials)
    return outcome_response(outcome)


@router.post("/{token}/accept")
async def accept_invite(
    token: str,
    identity: Identity = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    Accept Invite (signed in)

    Redirects (303) to the team page on success, or back to the invite page
    with an error message.

    Raises:
        - 401 Unauthorized: No valid session
    """
    flow = InviteAcceptanceFlow(uow, auth_provider)
    outcome = await flow.accept(token, identity)
    return outcome_response(outcome)


@router.post(
    "/{token}/signup",
    status_code=status.HTTP_200_OK,
    response_model=MagicLinkResponse,
)
async def signup_for_invite(
    token: str,
    request: InviteSignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    Sign Up via Invite

    Emails a magic link that lands on the invite acceptance page.

    Raises:
        - 400 Bad Request: EMAIL_REQUIRED, EMAIL_MISMATCH, MAGIC_LINK_FAILED
        - 500 Internal Server Error: Server error
    """
    flow = InviteAcceptanceFlow(uow, auth_provider)
    result = await flow.request_magic_link(
        token, request.email, site_url=ApplicationConfig.SITE_URL
    )

    if result.is_err():
        error = result.error
        if error.code in ("EMAIL_REQUIRED", "EMAIL_MISMATCH", "MAGIC_LINK_FAILED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
