from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from teamspace.api.error import ClientError, ServerError
from teamspace.api.utils.cookies import clear_session_cookie, set_session_cookie
from teamspace.app.services.auth_provider import IAuthProvider
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.app.use_cases.auth import (
    MAGIC_LINK_TYPE,
    CompleteSignInUseCase,
    MagicLinkResponse,
    SendMagicLinkUseCase,
)
from teamspace.depends import get_auth_provider, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])

LOGIN_PATH = "/auth/login"
HOME_PATH = "/team"


class MagicLinkRequest(BaseModel):
    """
    Login/signup HTTP request payload

    Validates incoming request before a magic link is sent.
    """

    email: EmailStr = Field(..., description="Email address to send the link to")


def _redirect(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=status.HTTP_303_SEE_OTHER)


async def _send_magic_link(email: str, auth_provider: IAuthProvider):
    use_case = SendMagicLinkUseCase(auth_provider)
    result = await use_case.execute(
        email, redirect_to=f"{ApplicationConfig.SITE_URL.rstrip('/')}/auth/callback"
    )

    if result.is_err():
        error = result.error
        if error.code == "MAGIC_LINK_FAILED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.post("/login", status_code=status.HTTP_200_OK, response_model=MagicLinkResponse)
async def login(
    request: MagicLinkRequest,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    Login with Magic Link

    Sends a sign-in link. Accounts are created on first use and the response
    never reveals whether the email was known.

    Raises:
        - 400 Bad Request: MAGIC_LINK_FAILED
        - 422 Unprocessable Entity: Invalid email (handled by FastAPI)
    """
    return await _send_magic_link(request.email, auth_provider)


@router.post("/signup", status_code=status.HTTP_200_OK, response_model=MagicLinkResponse)
async def signup(
    request: MagicLinkRequest,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    Signup with Magic Link

    Same as login; kept as its own route for the signup page.
    """
    return await _send_magic_link(request.email, auth_provider)


@router.get("/callback")
async def auth_callback(
    request: Request,
    token: Optional[str] = None,
    type: Optional[str] = None,
    code: Optional[str] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    Auth Callback

    Landing page for magic links (`?token=...&type=magiclink`) and OAuth
    (`?code=...`). Starts the session and redirects (303) to the team page,
    or to the login page with an error.
    """
    use_case = CompleteSignInUseCase(uow, auth_provider)
    result = await use_case.execute(
        token_hash=token if type == MAGIC_LINK_TYPE else None,
        type=MAGIC_LINK_TYPE if type == MAGIC_LINK_TYPE else None,
        code=code,
        code_verifier=request.cookies.get(ApplicationConfig.PKCE_VERIFIER_COOKIE_NAME),
    )

    if result.is_err():
        return _redirect(f"{LOGIN_PATH}?error=" + quote(result.error.message, safe=""))

    if result.value is None:
        return _redirect(LOGIN_PATH)

    response = _redirect(HOME_PATH)
    set_session_cookie(response, result.value)
    response.delete_cookie(ApplicationConfig.PKCE_VERIFIER_COOKIE_NAME, path="/")
    return response


@router.get("/confirm")
async def confirm(
    token_hash: Optional[str] = None,
    type: Optional[str] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    Confirm Email

    Verifies an emailed one-time token of any type. Redirects (303) to the
    team page on success and to the login page otherwise.
    """
    if not token_hash or not type:
        return _redirect(LOGIN_PATH)

    use_case = CompleteSignInUseCase(uow, auth_provider)
    result = await use_case.execute(token_hash=token_hash, type=type)

    if result.is_err() or result.value is None:
        return _redirect(LOGIN_PATH)

    response = _redirect(HOME_PATH)
    set_session_cookie(response, result.value)
    return response


@router.post("/logout")
async def logout():
    """Clear the session cookie and go back to the login page."""
    response = _redirect(LOGIN_PATH)
    clear_session_cookie(response)
    return response
