from typing import AsyncIterator, Optional

import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from teamspace.adapter.services.auth_provider import HostedAuthProvider
from teamspace.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from teamspace.app.services.auth_provider import IAuthProvider
from teamspace.app.use_cases.auth import RequestCredentials
from teamspace.domain.entities import Identity

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_auth_provider() -> AsyncIterator[IAuthProvider]:
    """One provider client per request; closed when the request ends."""
    async with httpx.AsyncClient(timeout=ApplicationConfig.AUTH_TIMEOUT_SECONDS) as client:
        yield HostedAuthProvider(
            client,
            base_url=ApplicationConfig.AUTH_URL,
            anon_key=ApplicationConfig.AUTH_ANON_KEY,
            jwt_secret=ApplicationConfig.AUTH_JWT_SECRET,
        )


def get_request_credentials(
    request: Request,
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> RequestCredentials:
    """
    Collect the credentials carried by a request.

    The session comes from the session cookie, or from an Authorization
    bearer header for API clients. The one-time token and its type come from
    the `token`/`token_hash` and `type` query parameters of emailed links.
    """
    access_token = request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)
    if not access_token and bearer is not None:
        access_token = bearer.credentials

    params = request.query_params
    return RequestCredentials(
        access_token=access_token,
        verification_token=params.get("token") or params.get("token_hash"),
        verification_type=params.get("type"),
    )


async def get_current_identity(
    credentials: RequestCredentials = Depends(get_request_credentials),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> Optional[Identity]:
    """Identity of the signed-in user, or None."""
    if not credentials.access_token:
        return None
    return await auth_provider.get_current_identity(credentials.access_token)


async def require_identity(
    identity: Optional[Identity] = Depends(get_current_identity),
) -> Identity:
    """
    Dependency for actions that need a signed-in user.

    Raises:
        HTTPException: 401 if there is no valid session
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Must be logged in",
        )
    return identity
