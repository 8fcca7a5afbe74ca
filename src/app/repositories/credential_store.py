from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import Account


class ICredentialStore(ABC):
    """Account credential store interface - application layer"""

    @abstractmethod
    async def find_by_identifier(self, email: str) -> Optional[Account]:
        """Get account by login identifier (email)"""
        pass

    @abstractmethod
    async def get_by_id(self, account_id: int) -> Optional[Account]:
        """Get account by numeric ID"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account"""
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Persist changes to an existing account"""
        pass
