"""
Authentication Use Cases

Identity resolution, profile bootstrap and passwordless sign-in.
"""

from .complete_sign_in_use_case import CompleteSignInUseCase
from .dtos import (
    EnsureProfileResponse,
    MagicLinkResponse,
    RequestCredentials,
    ResolvedIdentity,
)
from .ensure_user_profile_use_case import EnsureUserProfileUseCase
from .resolve_identity_use_case import MAGIC_LINK_TYPE, ResolveIdentityUseCase
from .send_magic_link_use_case import SendMagicLinkUseCase

__all__ = [
    # Use Cases
    "ResolveIdentityUseCase",
    "EnsureUserProfileUseCase",
    "SendMagicLinkUseCase",
    "CompleteSignInUseCase",
    # DTOs - Commands
    "RequestCredentials",
    # DTOs - Responses
    "ResolvedIdentity",
    "EnsureProfileResponse",
    "MagicLinkResponse",
    # Constants
    "MAGIC_LINK_TYPE",
]
