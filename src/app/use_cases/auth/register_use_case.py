from sqlalchemy.exc import IntegrityError

from src.app.services.passwords import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account
from src.domain.result import Error, Result, Return
from .dtos import RegisterCommand, RegisterResponse

EMAIL_ALREADY_EXISTS = Error("EMAIL_ALREADY_EXISTS", "Email is already in use")


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Reject emails that are already registered (Conflict)
    2. Hash password with bcrypt
    3. Create Account with the default role
    4. Commit; a unique-constraint race is reported as the same Conflict
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated account details

        Returns:
            Result[RegisterResponse] with the new account ID
            or Error(EMAIL_ALREADY_EXISTS) if email exists
        """
        async with self.uow:
            existing = await self.uow.credentials.find_by_identifier(command.email)
            if existing:
                return Return.err(EMAIL_ALREADY_EXISTS)

            account = Account(
                email=command.email,
                password_hash=hash_password(command.password),
                full_name=command.full_name,
                phone_number=command.phone_number,
            )

            try:
                account = await self.uow.credentials.create(account)
                account_id = account.id
                await self.uow.commit()
            except IntegrityError:
                # Registered concurrently between the check and the insert
                await self.uow.rollback()
                return Return.err(EMAIL_ALREADY_EXISTS)

            return Return.ok(
                RegisterResponse(message="Registration successful", account_id=account_id)
            )
