from fastapi import APIRouter, Depends

from passx.core.security import get_current_user_from_token
from passx.schemas.password import (
    ChangePasswordBody,
    ChangePasswordRequest,
    ErrorResponse,
    MessageResponse,
    ResetPasswordCodeRequest,
    ResetPasswordRequest,
)
from passx.services.deps import UserPasswordServiceDep

router = APIRouter()

error_responses = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.post("/password/reset/code", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
async def request_reset_password(
    data: ResetPasswordCodeRequest,
    service: UserPasswordServiceDep,
):
    """Send a reset-password link to the user's email."""
    await service.send_reset_password_mail(data.email)
    return {"message": "A password reset link has been sent"}


@router.post("/password/reset", response_model=MessageResponse, responses=error_responses)
async def reset_password(
    data: ResetPasswordRequest,
    service: UserPasswordServiceDep,
):
    """Reset password using the one-time code from the email."""
    await service.reset_password(data)
    return {"message": "Password reset successfully"}


@router.post(
    "/password/change",
    response_model=MessageResponse,
    responses={**error_responses, 401: {"model": ErrorResponse}},
)
async def change_password(
    data: ChangePasswordBody,
    service: UserPasswordServiceDep,
    current_user: dict = Depends(get_current_user_from_token),
):
    """Change the current user's password."""
    await service.change_password(
        ChangePasswordRequest(
            user_id=current_user["user_id"],
            password=data.password,
            new_password=data.new_password,
        )
    )
    return {"message": "Password changed successfully"}
