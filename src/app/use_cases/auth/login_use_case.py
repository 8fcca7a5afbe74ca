"""
Login Use Case

Checks credentials and issues a bearer token.
"""

from src.api.utils.jwt import TokenCodec
from src.app.services.passwords import burn_password_check, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import LoginResponse

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid username or password")


class LoginUseCase:
    """
    Use case for login and bearer token issuance.

    Business Rules:
    - Unknown emails still pay for one bcrypt check (timing)
    - Unknown email and wrong password return the same error
    - Token subject is the account email
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: Account email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the access token, or Error
        """
        async with self.uow:
            account = await self.uow.credentials.find_by_identifier(email)

            if account is None:
                burn_password_check()
                return Return.err(INVALID_CREDENTIALS)

            if not verify_password(password, account.password_hash):
                return Return.err(INVALID_CREDENTIALS)

            subject = account.email

        access_token = self.token_codec.issue(subject)

        return Return.ok(
            LoginResponse(message="Login successful", access_token=access_token)
        )
