"""
Password Recovery DTOs (Data Transfer Objects)

Responses carry a status and a human-readable message only; never the
code or internal identifiers.
"""

from pydantic import BaseModel


class ForgotPasswordResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class VerifyOtpResponse(BaseModel):
    """Response for OTP verification use case"""

    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    status: str
    message: str
