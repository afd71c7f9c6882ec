from abc import ABC, abstractmethod
from typing import Optional

from teamspace.domain.entities import AuthSession, Identity


class AuthProviderError(Exception):
    """The hosted auth provider rejected a request or could not be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class IAuthProvider(ABC):
    """Hosted auth provider interface - application layer"""

    @abstractmethod
    async def verify_one_time_token(
        self, token_hash: str, type: str
    ) -> Optional[AuthSession]:
        """Verify a one-time (magic link) token; None if the provider returned no user"""
        pass

    @abstractmethod
    async def get_current_identity(self, access_token: str) -> Optional[Identity]:
        """Resolve the identity behind a session access token, None if invalid"""
        pass

    @abstractmethod
    async def send_magic_link(self, email: str, redirect_to: str) -> None:
        """Email a sign-in link that lands on redirect_to"""
        pass

    @abstractmethod
    async def exchange_code_for_session(
        self, auth_code: str, code_verifier: Optional[str] = None
    ) -> Optional[AuthSession]:
        """Exchange an OAuth authorization code; None if no session was issued"""
        pass
