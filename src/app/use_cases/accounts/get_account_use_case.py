from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import AccountResponse


class GetAccountUseCase:
    """
    Use case for reading account details.

    Business Rules:
    - Caller must be authenticated (enforced by the route)
    - Response excludes credential material
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: int) -> Result[AccountResponse]:
        async with self.uow:
            account = await self.uow.credentials.get_by_id(account_id)
            if account is None:
                return Return.err(
                    Error("ACCOUNT_NOT_FOUND", f"Account not found with ID: {account_id}")
                )

            return Return.ok(
                AccountResponse(
                    id=account.id,
                    email=account.email,
                    full_name=account.full_name,
                    phone_number=account.phone_number,
                    role_id=account.role_id,
                    created_at=account.created_at,
                    updated_at=account.updated_at,
                )
            )
