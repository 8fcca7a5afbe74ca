from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.jwt import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
)
from src.depends import get_token_codec, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(
        ...,
        min_length=ApplicationConfig.PASSWORD_MIN_LENGTH,
        description="Account password",
    )
    full_name: str = Field(..., min_length=1, max_length=255, description="Full name")
    phone_number: Optional[str] = Field(default=None, max_length=32)


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Account Registration

    Raises:
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        phone_number=request.phone_number,
    )

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: str = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    Login

    Checks credentials and returns a bearer token.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, token_codec)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
