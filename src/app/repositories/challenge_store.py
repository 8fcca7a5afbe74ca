from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import RecoveryChallenge


class IChallengeStore(ABC):
    """
    RecoveryChallenge store interface - application layer

    Every mutation is atomic at single-row granularity. Guarded mutations
    return False when the row no longer matches (deleted, superseded or
    already transitioned by a concurrent request).
    """

    @abstractmethod
    async def find_by_account(self, account_id: int) -> Optional[RecoveryChallenge]:
        """Get the challenge for an account"""
        pass

    @abstractmethod
    async def find_by_account_and_code(
        self, account_id: int, code: str
    ) -> Optional[RecoveryChallenge]:
        """Get the challenge for an account only if its code matches"""
        pass

    @abstractmethod
    async def upsert(self, challenge: RecoveryChallenge) -> None:
        """Insert the challenge, or overwrite otp/expiry/verified on the existing row"""
        pass

    @abstractmethod
    async def mark_verified(self, challenge_id: int, code: str) -> bool:
        """Set is_verified on an unverified challenge still holding this code"""
        pass

    @abstractmethod
    async def consume(self, challenge_id: int, code: str) -> bool:
        """Delete a verified challenge still holding this code"""
        pass

    @abstractmethod
    async def delete(self, challenge_id: int, code: str) -> bool:
        """Delete a challenge still holding this code, whatever its state"""
        pass
