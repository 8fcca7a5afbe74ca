"""
Password Recovery Use Cases

OTP based recovery: request -> verify -> reset.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_otp_use_case import VerifyOtpUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .otp import generate_otp
from .dtos import (
    ForgotPasswordResponse,
    VerifyOtpResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "VerifyOtpUseCase",
    "ResetPasswordUseCase",
    # Helpers
    "generate_otp",
    # DTOs - Responses
    "ForgotPasswordResponse",
    "VerifyOtpResponse",
    "ResetPasswordResponse",
]
