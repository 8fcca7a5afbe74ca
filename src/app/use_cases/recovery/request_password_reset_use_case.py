"""
Request Password Reset Use Case

Issues a one-time code for a password reset and dispatches it by email.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from src.app.services.otp_notifier import OtpDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import OTP_TTL, RecoveryChallenge
from src.domain.result import Result, Return
from .dtos import ForgotPasswordResponse
from .otp import generate_otp

logger = logging.getLogger(__name__)

GENERIC_ACKNOWLEDGEMENT = "If the email is registered, an OTP has been sent to it."


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset OTP.

    Business Rules:
    - 6-digit code from a cryptographically secure source
    - Code expires 5 minutes after issue
    - One challenge per account: a new request overwrites the previous
      code, expiry and verified flag (latest request wins)
    - Delivery is dispatched after commit, off the response path
    - No email enumeration (same response for valid/invalid emails)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: OtpDispatcher,
        clock: Callable[[], datetime] = utcnow,
        code_generator: Callable[[], str] = generate_otp,
        ttl: timedelta = OTP_TTL,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.clock = clock
        self.code_generator = code_generator
        self.ttl = ttl

    async def execute(self, email: str) -> Result[ForgotPasswordResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Account email address

        Returns:
            Result with the generic acknowledgement

        Note:
            Unknown emails get the same acknowledgement, but no challenge
            is stored and nothing is sent.
        """
        async with self.uow:
            account = await self.uow.credentials.find_by_identifier(email)

            if account is None:
                logger.info("Password reset requested for an unknown email")
                return Return.ok(self._acknowledgement())

            code = self.code_generator()
            challenge = RecoveryChallenge(
                account_id=account.id,
                otp=code,
                expiration_time=self.clock() + self.ttl,
                is_verified=False,
            )
            await self.uow.challenges.upsert(challenge)
            await self.uow.commit()

            account_id, destination = account.id, account.email

        logger.info(f"Recovery challenge issued for account {account_id}")
        self.dispatcher.dispatch(destination, code)

        return Return.ok(self._acknowledgement())

    @staticmethod
    def _acknowledgement() -> ForgotPasswordResponse:
        return ForgotPasswordResponse(status="sent", message=GENERIC_ACKNOWLEDGEMENT)
