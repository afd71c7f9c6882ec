from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from libs.result import Error
from teamspace.api.error import ClientError, ServerError
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.app.use_cases.invites import CreateInviteUseCase
from teamspace.app.use_cases.organizations import (
    CreateOrganizationUseCase,
    GetTeamUseCase,
    ListUserOrganizationsUseCase,
    OrganizationInfo,
    OrganizationResponse,
    TeamResponse,
    UpdateOrganizationUseCase,
)
from teamspace.depends import get_current_identity, get_unit_of_work, require_identity
from teamspace.domain.entities import Identity, MembershipRole

router = APIRouter(prefix="/team", tags=["Team"])

LOGIN_PATH = "/auth/login"


class OrganizationNameRequest(BaseModel):
    """
    Create/rename organization HTTP request payload
    """

    name: str = Field(..., min_length=1, max_length=100, description="Organization name")


class InviteRequest(BaseModel):
    """
    Invite member HTTP request payload

    Validates incoming request for inviting a user to an organization.
    """

    email: EmailStr = Field(..., description="Email address to invite")
    role: MembershipRole = Field(MembershipRole.member, description="Role to grant")


class InviteCreatedResponse(BaseModel):
    """Invite link returned to the inviter"""

    success: bool
    invite_url: str
    expires_at: str
    development_mode: bool


class UpdateOrganizationResponse(BaseModel):
    update_success: bool
    message: str
    organization: OrganizationResponse


def _redirect(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=status.HTTP_303_SEE_OTHER)


def _parse_organization_id(org_id: str) -> Optional[UUID]:
    try:
        return UUID(org_id)
    except ValueError:
        return None


@router.get("")
async def team_home(
    identity: Optional[Identity] = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Team Home

    Redirects (303) to the user's first organization, or to the create page
    when they have none.
    """
    if identity is None:
        return _redirect(LOGIN_PATH)

    result = await ListUserOrganizationsUseCase(uow).execute(identity.id)
    if result.is_ok() and result.value:
        return _redirect(f"/team/{result.value[0].id}")

    return _redirect("/team/create")


@router.get(
    "/organizations",
    status_code=status.HTTP_200_OK,
    response_model=List[OrganizationInfo],
)
async def list_organizations(
    identity: Identity = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Organizations

    Organizations the signed-in user belongs to, for the organization
    switcher.

    Raises:
        - 401 Unauthorized: No valid session
    """
    result = await ListUserOrganizationsUseCase(uow).execute(identity.id)
    if result.is_err():
        raise ServerError(result.error)
    return result.value


@router.get("/create")
async def create_organization_page(
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """Create Organization page; only needs a session."""
    if identity is None:
        return _redirect(LOGIN_PATH)
    return {}


@router.post("/create")
async def create_organization(
    request: OrganizationNameRequest,
    identity: Identity = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Organization

    Creates the organization with the caller as owner and redirects (303) to
    its team page.

    Raises:
        - 400 Bad Request: INVALID_NAME
        - 401 Unauthorized: No valid session
        - 500 Internal Server Error: PROFILE_CREATE_FAILED, server error
    """
    use_case = CreateOrganizationUseCase(uow)
    result = await use_case.execute(identity, request.name)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_NAME":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return _redirect(f"/team/{result.value.id}?created=true")


@router.get("/{org_id}", status_code=status.HTTP_200_OK, response_model=TeamResponse)
async def get_team(
    org_id: str,
    identity: Optional[Identity] = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Team Page

    Organization details, the caller's role and the member list. Users who
    are not members are sent (303) back to the team home.
    """
    if identity is None:
        return _redirect(LOGIN_PATH)

    organization_id = _parse_organization_id(org_id)
    if organization_id is None:
        return _redirect("/team")

    result = await GetTeamUseCase(uow).execute(identity.id, organization_id)

    if result.is_err():
        if result.error.code in ("NOT_A_MEMBER", "ORGANIZATION_NOT_FOUND"):
            return _redirect("/team")
        raise ServerError(result.error)

    return result.value


@router.post(
    "/{org_id}",
    status_code=status.HTTP_200_OK,
    response_model=UpdateOrganizationResponse,
)
async def update_organization(
    org_id: str,
    request: OrganizationNameRequest,
    identity: Identity = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Rename Organization

    Raises:
        - 400 Bad Request: Invalid org_id format, INVALID_NAME
        - 401 Unauthorized: No valid session
        - 403 Forbidden: NOT_A_MEMBER, INSUFFICIENT_ROLE
        - 404 Not Found: ORGANIZATION_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    organization_id = _parse_organization_id(org_id)
    if organization_id is None:
        raise ClientError(
            Error("INVALID_ORGANIZATION_ID", "Invalid organization ID format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    use_case = UpdateOrganizationUseCase(uow)
    result = await use_case.execute(identity, organization_id, request.name)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_NAME":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("NOT_A_MEMBER", "INSUFFICIENT_ROLE"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return UpdateOrganizationResponse(
        update_success=True,
        message="Organization name updated successfully",
        organization=result.value,
    )


@router.post(
    "/{org_id}/invite",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteCreatedResponse,
)
async def invite_member(
    org_id: str,
    request: InviteRequest,
    identity: Identity = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invite Member

    Creates an invite and returns its link. Email delivery is not wired up
    yet, so the link is handed back for the inviter to share.

    Raises:
        - 400 Bad Request: Invalid org_id format, INVALID_ROLE
        - 401 Unauthorized: No valid session
        - 403 Forbidden: NOT_A_MEMBER, INSUFFICIENT_ROLE
        - 409 Conflict: ALREADY_MEMBER, INVITE_ALREADY_EXISTS
        - 500 Internal Server Error: Server error
    """
    organization_id = _parse_organization_id(org_id)
    if organization_id is None:
        raise ClientError(
            Error("INVALID_ORGANIZATION_ID", "Invalid organization ID format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    use_case = CreateInviteUseCase(uow, expiry_days=ApplicationConfig.INVITE_EXPIRY_DAYS)
    result = await use_case.execute(
        identity, organization_id, request.email, request.role.value
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ROLE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("NOT_A_MEMBER", "INSUFFICIENT_ROLE"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("ALREADY_MEMBER", "INVITE_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    invite = result.value
    return InviteCreatedResponse(
        success=True,
        invite_url=f"{ApplicationConfig.SITE_URL.rstrip('/')}/invite/{invite.token}",
        expires_at=invite.expires_at,
        development_mode=True,
    )
