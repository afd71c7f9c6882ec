"""
Invite Use Case DTOs (Data Transfer Objects)

Responses for invite validation, acceptance and creation, plus the explicit
outcomes of the invite acceptance flow.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from teamspace.domain.entities import AuthSession


# ============================================================================
# Response DTOs
# ============================================================================


class InviteDetails(BaseModel):
    """A pending, unexpired invite with its organization name"""

    id: str
    email: str
    role: str
    status: str
    expires_at: str
    organization_id: str
    organization_name: str


class AcceptInviteResponse(BaseModel):
    """Response for accept invite use case"""

    organization_id: str
    already_member: bool


class CreateInviteResponse(BaseModel):
    """Response for create invite use case"""

    invite_id: str
    token: str
    email: str
    role: str
    expires_at: str


class AcceptedInvite(BaseModel):
    """One invite settled by the pending invite sweep"""

    invite_id: str
    organization_id: str
    organization_name: str
    role: str
    already_member: bool


class CheckPendingInvitesResponse(BaseModel):
    """Response for check pending invites use case"""

    accepted_count: int
    invites: List[AcceptedInvite]


class InviteViewContext(BaseModel):
    """Page context for the invite view"""

    invite: InviteDetails
    can_accept_directly: bool
    wrong_user: bool
    current_user_email: Optional[str] = None
    error: Optional[str] = None


# ============================================================================
# Flow outcomes
# ============================================================================


class ControlTransfer(BaseModel):
    """
    Terminal redirect.

    session carries a session established during this request so the
    response can persist it alongside the redirect.
    """

    location: str
    session: Optional[AuthSession] = None


class RenderError(BaseModel):
    """Terminal error page"""

    status_code: int
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class RenderInvite(BaseModel):
    """Invite page"""

    context: InviteViewContext


FlowOutcome = Union[ControlTransfer, RenderError, RenderInvite]
