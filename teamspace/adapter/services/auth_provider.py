"""
Hosted auth provider client

Talks to the provider's REST API (magic links, one-time token verification,
PKCE code exchange) over httpx. Session tokens are provider-signed JWTs and
are verified locally.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

import httpx

from teamspace.api.utils.jwt import verify_session_token
from teamspace.app.services.auth_provider import AuthProviderError, IAuthProvider
from teamspace.domain.entities import AuthSession, Identity

logger = logging.getLogger(__name__)


class HostedAuthProvider(IAuthProvider):
    """httpx implementation of the auth provider interface"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        anon_key: str,
        jwt_secret: Optional[str] = None,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.jwt_secret = jwt_secret

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.anon_key}",
            "Content-Type": "application/json",
        }

    async def _post(
        self, path: str, payload: Dict[str, Any], params: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        try:
            resp = await self.client.post(
                f"{self.base_url}{path}",
                json=payload,
                params=params,
                headers=self.headers,
            )
        except httpx.HTTPError as exc:
            logger.error(f"Auth provider unreachable on {path}: {exc}")
            raise AuthProviderError("Authentication service unavailable") from exc

        if resp.is_error:
            message = _error_message(resp)
            logger.warning(f"Auth provider rejected {path}: {resp.status_code} {message}")
            raise AuthProviderError(message, status_code=resp.status_code)

        if not resp.content:
            return {}
        return resp.json()

    async def verify_one_time_token(
        self, token_hash: str, type: str
    ) -> Optional[AuthSession]:
        data = await self._post("/verify", {"type": type, "token_hash": token_hash})
        return _parse_session(data)

    async def get_current_identity(self, access_token: str) -> Optional[Identity]:
        payload = verify_session_token(access_token, secret=self.jwt_secret)
        if payload is None or not payload.get("sub") or not payload.get("email"):
            return None
        try:
            user_id = UUID(payload["sub"])
        except ValueError:
            return None
        metadata = payload.get("user_metadata") or {}
        return Identity(
            id=user_id,
            email=payload["email"],
            full_name=metadata.get("full_name"),
        )

    async def send_magic_link(self, email: str, redirect_to: str) -> None:
        await self._post(
            "/otp",
            {"email": email, "create_user": True},
            params={"redirect_to": redirect_to},
        )

    async def exchange_code_for_session(
        self, auth_code: str, code_verifier: Optional[str] = None
    ) -> Optional[AuthSession]:
        payload = {"auth_code": auth_code}
        if code_verifier:
            payload["code_verifier"] = code_verifier
        data = await self._post("/token", payload, params={"grant_type": "pkce"})
        return _parse_session(data)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    for key in ("msg", "error_description", "message", "error"):
        if isinstance(body, dict) and body.get(key):
            return str(body[key])
    return f"HTTP {resp.status_code}"


def _parse_session(data: Dict[str, Any]) -> Optional[AuthSession]:
    user = data.get("user")
    if not data.get("access_token") or not user:
        return None
    metadata = user.get("user_metadata") or {}
    return AuthSession(
        access_token=data["access_token"],
        refresh_token=data.get("refresh_token"),
        expires_in=data.get("expires_in", 3600),
        identity=Identity(
            id=UUID(user["id"]),
            email=user.get("email") or "",
            full_name=metadata.get("full_name"),
        ),
    )
