"""
Reset Password Use Case

Consumes a verified recovery challenge and sets the new password.
"""

import logging
from datetime import datetime
from typing import Callable

from config import ApplicationConfig
from src.app.services.passwords import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.result import Error, Result, Return
from .challenge_lookup import resolve_live_challenge
from .dtos import ResetPasswordResponse
from .errors import INVALID_CODE, OTP_NOT_VERIFIED

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for resetting a password with a verified OTP.

    Business Rules:
    - Challenge is resolved exactly like VerifyOtpUseCase
    - Challenge must be verified first (verify -> reset ordering)
    - Challenge deletion and password update commit together, so a
      failure leaves both untouched and the reset can be retried
    - Password is hashed with bcrypt
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    def _validate_password(self, password: str) -> Result[None]:
        """
        Validate password complexity.

        Args:
            password: Password to validate

        Returns:
            Result with None if valid, or Error if invalid
        """
        min_length = ApplicationConfig.PASSWORD_MIN_LENGTH
        if len(password) < min_length:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {min_length} characters long",
                )
            )

        return Return.ok(None)

    async def execute(
        self, email: str, code: str, new_password: str
    ) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            email: Account email address
            code: Verified one-time code
            new_password: New password to set

        Returns:
            Result with reset status, or Error

        Errors:
            - INVALID_PASSWORD: Password does not meet complexity requirements
            - INVALID_CODE: No challenge holds this code, or it was consumed
            - OTP_EXPIRED: Challenge expired (now deleted)
            - OTP_NOT_VERIFIED: Code has not been verified yet
        """
        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            resolved = await resolve_live_challenge(self.uow, email, code, self.clock())
            if resolved.is_err():
                return Return.err(resolved.error)

            account, challenge = resolved.value

            if not challenge.is_verified:
                return Return.err(OTP_NOT_VERIFIED)

            consumed = await self.uow.challenges.consume(challenge.id, code)
            if not consumed:
                # Consumed or superseded by a concurrent request
                await self.uow.rollback()
                return Return.err(INVALID_CODE)

            account_id = account.id
            account.password_hash = hash_password(new_password)
            account.updated_at = self.clock()
            await self.uow.credentials.save(account)

            await self.uow.commit()

        logger.info(f"Password reset completed for account {account_id}")

        return Return.ok(
            ResetPasswordResponse(
                status="success", message="Password has been reset successfully."
            )
        )
