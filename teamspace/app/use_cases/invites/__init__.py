"""
Invite Use Cases

Invite validation, creation, acceptance and the acceptance flow.
"""

from .accept_invite_use_case import AcceptInviteUseCase
from .check_pending_invites_use_case import CheckPendingInvitesUseCase
from .create_invite_use_case import CreateInviteUseCase
from .dtos import (
    AcceptedInvite,
    AcceptInviteResponse,
    CheckPendingInvitesResponse,
    ControlTransfer,
    CreateInviteResponse,
    FlowOutcome,
    InviteDetails,
    InviteViewContext,
    RenderError,
    RenderInvite,
)
from .invite_acceptance_flow import InviteAcceptanceFlow
from .validate_invite_token_use_case import ValidateInviteTokenUseCase

__all__ = [
    # Use Cases
    "ValidateInviteTokenUseCase",
    "AcceptInviteUseCase",
    "CreateInviteUseCase",
    "CheckPendingInvitesUseCase",
    "InviteAcceptanceFlow",
    # DTOs - Responses
    "InviteDetails",
    "AcceptInviteResponse",
    "CreateInviteResponse",
    "AcceptedInvite",
    "CheckPendingInvitesResponse",
    "InviteViewContext",
    # Flow outcomes
    "ControlTransfer",
    "RenderError",
    "RenderInvite",
    "FlowOutcome",
]
