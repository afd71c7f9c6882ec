"""
Send Magic Link Use Case

Passwordless sign-in and sign-up. The provider creates the account on first
use and never reveals whether the email already exists.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from teamspace.app.services.auth_provider import AuthProviderError, IAuthProvider

from .dtos import MagicLinkResponse

logger = logging.getLogger(__name__)


class SendMagicLinkUseCase:
    def __init__(self, auth_provider: IAuthProvider):
        self.auth_provider = auth_provider

    async def execute(
        self, email: str, redirect_to: str, message: Optional[str] = None
    ) -> Result[MagicLinkResponse]:
        try:
            await self.auth_provider.send_magic_link(email, redirect_to)
        except AuthProviderError as exc:
            logger.warning(f"Magic link error: {exc.message}")
            return Return.err(Error("MAGIC_LINK_FAILED", exc.message))

        return Return.ok(MagicLinkResponse(success=True, message=message))
