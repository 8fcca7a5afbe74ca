"""
Account Entity

Represents an authenticatable principal.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Account(SQLModel, table=True):
    """
    Account entity - the identity both auth flows operate on.

    Business Rules:
    - Email is the login identifier and must be unique across all accounts
    - Password stored as bcrypt hash, never returned by the API
    - password_hash is only changed by registration and password reset
    """

    __tablename__ = "accounts"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    full_name: str = Field(max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=32)
    role_id: int = Field(default=1)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
