from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Principal
from src.domain.result import Error, Result, Return


class LoadIdentityUseCase:
    """Resolve a token subject to the principal bound to the request"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[Principal]:
        async with self.uow:
            account = await self.uow.credentials.find_by_identifier(email)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            return Return.ok(Principal(account_id=account.id, email=account.email))
