from fastapi import Response

from config import ApplicationConfig
from teamspace.domain.entities import AuthSession


def set_session_cookie(response: Response, session: AuthSession) -> None:
    """Persist a provider session on the response"""
    response.set_cookie(
        ApplicationConfig.SESSION_COOKIE_NAME,
        session.access_token,
        max_age=session.expires_in,
        httponly=True,
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(ApplicationConfig.SESSION_COOKIE_NAME, path="/")
