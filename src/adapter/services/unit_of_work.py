from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.challenge_store import ChallengeStore
from src.adapter.repositories.credential_store import CredentialStore
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all stores with the session
        self.credentials = CredentialStore(self.session)
        self.challenges = ChallengeStore(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
