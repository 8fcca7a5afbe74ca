"""
RecoveryChallenge Entity

One in-flight OTP password reset attempt per account.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

OTP_LENGTH = 6
OTP_TTL = timedelta(minutes=5)


class RecoveryChallenge(SQLModel, table=True):
    """
    RecoveryChallenge entity - OTP issued for a password reset.

    Business Rules:
    - At most one row per account (unique account_id); a new request
      overwrites otp, expiration_time and is_verified in place
    - Expires 5 minutes after it was issued
    - Moves forward only: unverified -> verified -> deleted on reset
    - Expired rows are deleted the first time they are touched
    """

    __tablename__ = "password_resets"

    id: Optional[int] = Field(default=None, primary_key=True)

    account_id: int = Field(foreign_key="accounts.id", unique=True, index=True)
    otp: str = Field(max_length=OTP_LENGTH)

    expiration_time: datetime = Field(sa_column=Column(DateTime, nullable=False))
    is_verified: bool = Field(default=False)

    def is_expired(self, now: datetime) -> bool:
        return self.expiration_time < now
