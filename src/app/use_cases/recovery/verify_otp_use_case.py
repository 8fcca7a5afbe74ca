"""
Verify OTP Use Case

The only transition of a recovery challenge into the verified state.
"""

import logging
from datetime import datetime
from typing import Callable

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.result import Result, Return
from .challenge_lookup import resolve_live_challenge
from .dtos import VerifyOtpResponse
from .errors import INVALID_CODE, OTP_ALREADY_USED

logger = logging.getLogger(__name__)


class VerifyOtpUseCase:
    """
    Use case for verifying a password reset OTP.

    Business Rules:
    - Code must match the account's current challenge
    - Expired challenges are deleted and rejected
    - A code verifies once; re-verifying deletes the challenge
    - Verification and deletion are guarded on the code, so a challenge
      replaced or verified by a concurrent request is rejected cleanly
      and a newer challenge is never removed
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self, email: str, code: str) -> Result[VerifyOtpResponse]:
        """
        Execute verify OTP use case.

        Args:
            email: Account email address
            code: One-time code from the email

        Returns:
            Result with verification status, or Error

        Errors:
            - INVALID_CODE: No challenge holds this code for the account
            - OTP_EXPIRED: Challenge expired (now deleted)
            - OTP_ALREADY_USED: Code was already verified (now deleted)
        """
        async with self.uow:
            resolved = await resolve_live_challenge(self.uow, email, code, self.clock())
            if resolved.is_err():
                return Return.err(resolved.error)

            account, challenge = resolved.value

            if challenge.is_verified:
                account_id = account.id
                if not await self.uow.challenges.delete(challenge.id, code):
                    # Re-issued by a newer request; that challenge stays
                    await self.uow.rollback()
                    return Return.err(INVALID_CODE)

                await self.uow.commit()
                logger.warning(f"Re-verification attempt for account {account_id}")
                return Return.err(OTP_ALREADY_USED)

            verified = await self.uow.challenges.mark_verified(challenge.id, code)
            if not verified:
                # Superseded or verified by a concurrent request
                await self.uow.rollback()
                return Return.err(INVALID_CODE)

            await self.uow.commit()

            return Return.ok(
                VerifyOtpResponse(status="verified", message="OTP verified successfully.")
            )
