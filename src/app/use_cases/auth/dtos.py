"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    full_name: str
    phone_number: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for account registration use case"""

    message: str
    account_id: int


class LoginResponse(BaseModel):
    """Response for login use case"""

    message: str
    access_token: str
    token_type: str = "bearer"
