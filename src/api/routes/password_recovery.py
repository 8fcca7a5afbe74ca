from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.otp_notifier import IOtpNotifier, OtpDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.recovery import (
    ForgotPasswordResponse,
    RequestPasswordResetUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
    VerifyOtpResponse,
    VerifyOtpUseCase,
)
from src.depends import get_otp_notifier, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Password Recovery"])

# Expected, user-facing recovery states; all reported as 400
RECOVERY_ERROR_CODES = (
    "INVALID_CODE",
    "OTP_EXPIRED",
    "OTP_ALREADY_USED",
    "OTP_NOT_VERIFIED",
    "INVALID_PASSWORD",
)


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=ForgotPasswordResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: IOtpNotifier = Depends(get_otp_notifier),
):
    """
    Request Password Reset OTP

    Stores a 6-digit OTP (valid 5 minutes) and emails it after the
    response is sent.

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - The code is never part of the response

    Returns:
        - 200 OK: Always returns the generic acknowledgement
        - 500 Internal Server Error: Server error
    """
    dispatcher = OtpDispatcher(notifier, background_tasks.add_task)
    use_case = RequestPasswordResetUseCase(uow, dispatcher)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class VerifyOtpRequest(BaseModel):
    """Verify OTP HTTP request payload"""

    email: str = Field(..., min_length=1, description="Account email address")
    otp: str = Field(..., min_length=1, description="One-time code from the email")


@router.post(
    "/verify-otp", status_code=status.HTTP_200_OK, response_model=VerifyOtpResponse
)
async def verify_otp(
    request: VerifyOtpRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Verify Password Reset OTP

    Raises:
        - 400 Bad Request: Invalid, expired or already used OTP
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyOtpUseCase(uow)
    result = await use_case.execute(request.email, request.otp)

    if result.is_err():
        error = result.error
        if error.code in RECOVERY_ERROR_CODES:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    email: str = Field(..., min_length=1, description="Account email address")
    otp: str = Field(..., min_length=1, description="Verified one-time code")
    new_password: str = Field(
        ...,
        min_length=ApplicationConfig.PASSWORD_MIN_LENGTH,
        description="New password",
    )


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
)
async def reset_password(
    request: ResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Reset Password

    Requires an OTP verified through /auth/verify-otp. The OTP is consumed
    in the same transaction as the password update.

    Raises:
        - 400 Bad Request: Invalid, expired or unverified OTP
        - 422 Unprocessable Entity: Password too short (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    use_case = ResetPasswordUseCase(uow)
    result = await use_case.execute(request.email, request.otp, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in RECOVERY_ERROR_CODES:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
