"""
Auth Use Case DTOs (Data Transfer Objects)

Commands and responses for authentication flows.
"""

from typing import Optional

from pydantic import BaseModel

from teamspace.domain.entities import AuthSession, Identity


# ============================================================================
# Command DTOs
# ============================================================================


class RequestCredentials(BaseModel):
    """Credentials a request may carry"""

    access_token: Optional[str] = None
    verification_token: Optional[str] = None
    verification_type: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class ResolvedIdentity(BaseModel):
    """
    Result of identity resolution.

    identity is None for unauthenticated requests. session is set only when a
    one-time token was verified during this request and must be persisted.
    """

    identity: Optional[Identity] = None
    session: Optional[AuthSession] = None

    @property
    def authenticated(self) -> bool:
        return self.identity is not None


class EnsureProfileResponse(BaseModel):
    """Response for ensure user profile use case"""

    user_id: str
    created: bool


class MagicLinkResponse(BaseModel):
    """Response for send magic link use case"""

    success: bool
    message: Optional[str] = None
