"""
Complete Sign-In Use Case

Landing step after the provider sends the user back: either a one-time token
(magic link, email confirmation) or an OAuth authorization code.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from teamspace.app.services.auth_provider import AuthProviderError, IAuthProvider
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.domain.entities import AuthSession

from .ensure_user_profile_use_case import EnsureUserProfileUseCase

logger = logging.getLogger(__name__)


class CompleteSignInUseCase:
    """
    Use case for finishing a provider sign-in.

    Business Rules:
    - One-time tokens are checked before authorization codes
    - The user profile is bootstrapped on success; failing that never blocks
      sign-in
    - Returns no session (and no error) when nothing usable was supplied
    """

    def __init__(self, uow: UnitOfWork, auth_provider: IAuthProvider):
        self.uow = uow
        self.auth_provider = auth_provider

    async def execute(
        self,
        token_hash: Optional[str] = None,
        type: Optional[str] = None,
        code: Optional[str] = None,
        code_verifier: Optional[str] = None,
    ) -> Result[Optional[AuthSession]]:
        """
        Execute complete sign-in use case.

        Args:
            token_hash: One-time token from the emailed link
            type: One-time token type (magiclink, signup, email, ...)
            code: OAuth authorization code
            code_verifier: PKCE verifier stored when the OAuth flow started

        Returns:
            Result with the new AuthSession (None if nothing to verify), or Error

        Errors:
            - SIGN_IN_FAILED: Provider rejected the token or code
        """
        session = None
        try:
            if token_hash and type:
                session = await self.auth_provider.verify_one_time_token(
                    token_hash, type
                )
            elif code:
                session = await self.auth_provider.exchange_code_for_session(
                    code, code_verifier
                )
        except AuthProviderError as exc:
            logger.warning(f"Sign-in error: {exc.message}")
            return Return.err(Error("SIGN_IN_FAILED", exc.message))

        if session is None:
            return Return.ok(None)

        profile_result = await EnsureUserProfileUseCase(self.uow).execute(
            session.identity
        )
        if profile_result.is_err():
            logger.error(
                f"Continuing sign-in for {session.identity.id} without a profile"
            )

        return Return.ok(session)
