from datetime import timedelta
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from teamspace.adapter.services.auth_provider import HostedAuthProvider
from teamspace.app.services.auth_provider import AuthProviderError, IAuthProvider
from teamspace.domain.entities import AuthSession, Identity
from tests.fixtures.session_tokens import create_session_token


class FakeAuthProvider(IAuthProvider):
    """
    In-memory stand-in for the hosted auth provider.

    One-time tokens and authorization codes are registered up front; sessions
    are real signed JWTs, so identity resolution goes through the same token
    checks as production.
    """

    def __init__(self):
        self.one_time_tokens: Dict[str, Identity] = {}
        self.codes: Dict[str, Identity] = {}
        self.sent_links: List[Tuple[str, str]] = []
        self.unavailable = False
        # Local verification shares the production code path
        self._verifier = HostedAuthProvider(client=None, base_url="", anon_key="")

    def register_user(self, email: str, full_name: Optional[str] = None) -> Identity:
        return Identity(id=uuid4(), email=email, full_name=full_name)

    def issue_magic_link(self, identity: Identity) -> str:
        token_hash = uuid4().hex
        self.one_time_tokens[token_hash] = identity
        return token_hash

    def issue_code(self, identity: Identity) -> str:
        code = uuid4().hex
        self.codes[code] = identity
        return code

    def session_for(self, identity: Identity) -> AuthSession:
        access_token = create_session_token(
            str(identity.id),
            identity.email,
            timedelta(hours=1),
            full_name=identity.full_name,
        )
        return AuthSession(
            access_token=access_token,
            refresh_token=uuid4().hex,
            expires_in=3600,
            identity=identity,
        )

    async def verify_one_time_token(self, token_hash: str, type: str) -> Optional[AuthSession]:
        self._check_available()
        identity = self.one_time_tokens.pop(token_hash, None)
        if identity is None:
            raise AuthProviderError("Token has expired or is invalid", status_code=403)
        return self.session_for(identity)

    async def get_current_identity(self, access_token: str) -> Optional[Identity]:
        return await self._verifier.get_current_identity(access_token)

    async def send_magic_link(self, email: str, redirect_to: str) -> None:
        self._check_available()
        self.sent_links.append((email, redirect_to))

    async def exchange_code_for_session(
        self, auth_code: str, code_verifier: Optional[str] = None
    ) -> Optional[AuthSession]:
        self._check_available()
        identity = self.codes.pop(auth_code, None)
        if identity is None:
            raise AuthProviderError("invalid flow state, no valid flow state found")
        return self.session_for(identity)

    def _check_available(self):
        if self.unavailable:
            raise AuthProviderError("Authentication service unavailable")


def auth_headers(auth_provider: FakeAuthProvider, identity: Identity) -> Dict[str, str]:
    """Bearer header carrying a valid session for identity."""
    session = auth_provider.session_for(identity)
    return {"Authorization": f"Bearer {session.access_token}"}
