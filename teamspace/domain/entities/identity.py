"""
Identity and AuthSession

Ephemeral, per-request values produced by the auth provider. Not persisted.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class Identity(BaseModel):
    """Who the request is acting as. email always comes from the provider."""

    id: UUID
    email: str
    full_name: Optional[str] = None


class AuthSession(BaseModel):
    """Session issued by the provider after token verification or code exchange"""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: int = 3600
    identity: Identity
