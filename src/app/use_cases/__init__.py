"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, identity resolution
- recovery/: OTP password recovery
- accounts/: Account reads
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    LoginUseCase,
    LoadIdentityUseCase,
)
from .recovery import (
    RequestPasswordResetUseCase,
    VerifyOtpUseCase,
    ResetPasswordUseCase,
)
from .accounts import (
    GetAccountUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "LoginUseCase",
    "LoadIdentityUseCase",
    # Recovery
    "RequestPasswordResetUseCase",
    "VerifyOtpUseCase",
    "ResetPasswordUseCase",
    # Accounts
    "GetAccountUseCase",
]
