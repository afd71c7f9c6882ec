from fastapi import APIRouter, Depends, status

from teamspace.api.error import ClientError, ServerError
from teamspace.app.services.unit_of_work import UnitOfWork
from teamspace.app.use_cases.invites import (
    CheckPendingInvitesResponse,
    CheckPendingInvitesUseCase,
)
from teamspace.depends import get_unit_of_work, require_identity
from teamspace.domain.entities import Identity

router = APIRouter(prefix="/api", tags=["Invites"])


class CheckInvitesResponse(CheckPendingInvitesResponse):
    success: bool = True


@router.post(
    "/check-invites",
    status_code=status.HTTP_200_OK,
    response_model=CheckInvitesResponse,
)
async def check_invites(
    identity: Identity = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Check Pending Invites

    Accepts every live invite addressed to the signed-in user's email.

    Raises:
        - 401 Unauthorized: No valid session
        - 409 Conflict: INVITE_ACCEPT_CONFLICT
        - 500 Internal Server Error: Server error
    """
    use_case = CheckPendingInvitesUseCase(uow)
    result = await use_case.execute(identity)

    if result.is_err():
        error = result.error
        if error.code == "INVITE_ACCEPT_CONFLICT":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return CheckInvitesResponse(**result.value.model_dump())
