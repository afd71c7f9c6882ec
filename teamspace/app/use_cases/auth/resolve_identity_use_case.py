"""
Resolve Identity Use Case

Works out who a request is acting as, verifying a one-time magic link token
first when one is present.
"""

import logging

from libs.result import Error, Result, Return
from teamspace.app.services.auth_provider import AuthProviderError, IAuthProvider

from .dtos import RequestCredentials, ResolvedIdentity

logger = logging.getLogger(__name__)

MAGIC_LINK_TYPE = "magiclink"


class ResolveIdentityUseCase:
    """
    Use case for resolving the identity behind a request.

    Business Rules:
    - A magic link token is verified before anything else
    - A failed verification is reported, never silently dropped
    - Email always comes from the provider, never from client input
    - No persistent state is touched
    """

    def __init__(self, auth_provider: IAuthProvider):
        self.auth_provider = auth_provider

    async def execute(self, credentials: RequestCredentials) -> Result[ResolvedIdentity]:
        """
        Execute resolve identity use case.

        Args:
            credentials: Session token and optional one-time token + type

        Returns:
            Result with ResolvedIdentity (identity None when unauthenticated),
            or Error when a one-time token failed verification

        Errors:
            - VERIFICATION_FAILED: Provider rejected the one-time token
            - AUTHENTICATION_FAILED: Provider accepted it but returned no user
        """
        if (
            credentials.verification_token
            and credentials.verification_type == MAGIC_LINK_TYPE
        ):
            try:
                session = await self.auth_provider.verify_one_time_token(
                    credentials.verification_token, MAGIC_LINK_TYPE
                )
            except AuthProviderError as exc:
                logger.warning(f"Magic link verification error: {exc.message}")
                return Return.err(
                    Error("VERIFICATION_FAILED", "Invalid or expired magic link")
                )

            if session is None:
                return Return.err(
                    Error("AUTHENTICATION_FAILED", "Authentication failed")
                )

            return Return.ok(
                ResolvedIdentity(identity=session.identity, session=session)
            )

        if credentials.access_token:
            identity = await self.auth_provider.get_current_identity(
                credentials.access_token
            )
            if identity is not None:
                return Return.ok(ResolvedIdentity(identity=identity))

        return Return.ok(ResolvedIdentity())
