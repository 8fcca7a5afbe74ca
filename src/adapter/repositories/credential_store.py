from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.credential_store import ICredentialStore
from src.domain.entities import Account


class CredentialStore(ICredentialStore):
    """Account credential store implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_identifier(self, email: str) -> Optional[Account]:
        """Get account by login identifier (email)"""
        stmt = select(Account).where(Account.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, account_id: int) -> Optional[Account]:
        """Get account by numeric ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: Account) -> Account:
        """Create a new account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def save(self, account: Account) -> Account:
        """Persist changes to an existing account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account
