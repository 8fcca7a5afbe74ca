from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from src.adapter.repositories.challenge_store import ChallengeStore
from src.domain.entities import RecoveryChallenge

DIALECTS = {"sqlite": sqlite.dialect(), "postgresql": postgresql.dialect()}


def make_session(dialect_name):
    session = MagicMock()
    session.get_bind.return_value.dialect.name = dialect_name
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    return session


def make_challenge():
    return RecoveryChallenge(
        account_id=1, otp="123456", expiration_time=datetime(2026, 1, 15, 12, 5)
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("dialect_name", ["sqlite", "postgresql"])
async def test_upsert_uses_on_conflict(dialect_name):
    session = make_session(dialect_name)

    await ChallengeStore(session).upsert(make_challenge())

    stmt = session.execute.call_args[0][0]
    sql = str(stmt.compile(dialect=DIALECTS[dialect_name]))
    assert "ON CONFLICT (account_id) DO UPDATE" in sql
    session.flush.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("dialect_name", ["mysql", "mssql", "oracle"])
async def test_upsert_rejects_unsupported_dialect(dialect_name):
    session = make_session(dialect_name)

    with pytest.raises(NotImplementedError, match=dialect_name):
        await ChallengeStore(session).upsert(make_challenge())

    session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_delete_is_guarded_on_code():
    session = make_session("sqlite")
    session.execute.return_value = MagicMock(rowcount=0)

    deleted = await ChallengeStore(session).delete(10, "111111")

    assert deleted is False
    stmt = session.execute.call_args[0][0]
    sql = str(stmt.compile(dialect=sqlite.dialect()))
    assert "password_resets.id = ?" in sql
    assert "password_resets.otp = ?" in sql
