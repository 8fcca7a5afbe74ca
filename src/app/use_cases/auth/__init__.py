"""
Authentication Use Cases

Registration, login and identity resolution.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .load_identity_use_case import LoadIdentityUseCase
from .dtos import (
    RegisterCommand,
    RegisterResponse,
    LoginResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LoadIdentityUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
]
