from abc import ABC, abstractmethod

from src.app.repositories.challenge_store import IChallengeStore
from src.app.repositories.credential_store import ICredentialStore


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines store access and transaction management"""

    # Store properties (initialized in __aenter__)
    credentials: ICredentialStore
    challenges: IChallengeStore

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
