from typing import Optional

from sqlalchemy import delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.challenge_store import IChallengeStore
from src.domain.entities import RecoveryChallenge


# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ChallengeStore(IChallengeStore):
    """RecoveryChallenge store implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_account(self, account_id: int) -> Optional[RecoveryChallenge]:
        """Get the challenge for an account"""
        stmt = select(RecoveryChallenge).where(RecoveryChallenge.account_id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_account_and_code(
        self, account_id: int, code: str
    ) -> Optional[RecoveryChallenge]:
        """Get the challenge for an account only if its code matches"""
        stmt = select(RecoveryChallenge).where(
            RecoveryChallenge.account_id == account_id,
            RecoveryChallenge.otp == code,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(self, challenge: RecoveryChallenge) -> None:
        """
        Insert or overwrite the account's challenge in a single statement.

        Relies on the unique constraint on account_id, so concurrent requests
        for one account always leave exactly one row holding the last code.

        Raises:
            NotImplementedError: database dialect has no ON CONFLICT upsert
        """
        dialect = self.session.get_bind().dialect.name
        insert = UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(
                f"Challenge upsert is not supported on the {dialect} dialect"
            )

        stmt = insert(RecoveryChallenge).values(
            account_id=challenge.account_id,
            otp=challenge.otp,
            expiration_time=challenge.expiration_time,
            is_verified=False,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["account_id"],
            set_={
                "otp": stmt.excluded.otp,
                "expiration_time": stmt.excluded.expiration_time,
                "is_verified": False,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def mark_verified(self, challenge_id: int, code: str) -> bool:
        """Set is_verified on an unverified challenge still holding this code"""
        stmt = (
            update(RecoveryChallenge)
            .where(
                RecoveryChallenge.id == challenge_id,
                RecoveryChallenge.otp == code,
                RecoveryChallenge.is_verified == False,
            )
            .values(is_verified=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def consume(self, challenge_id: int, code: str) -> bool:
        """Delete a verified challenge still holding this code"""
        stmt = (
            delete(RecoveryChallenge)
            .where(
                RecoveryChallenge.id == challenge_id,
                RecoveryChallenge.otp == code,
                RecoveryChallenge.is_verified == True,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def delete(self, challenge_id: int, code: str) -> bool:
        """
        Delete a challenge still holding this code, whatever its state.

        A challenge re-issued by a newer request carries a new code and is
        left alone.
        """
        stmt = (
            delete(RecoveryChallenge)
            .where(
                RecoveryChallenge.id == challenge_id,
                RecoveryChallenge.otp == code,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
