import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with both stores"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.credentials = MagicMock()
    uow.credentials.find_by_identifier = AsyncMock()
    uow.credentials.get_by_id = AsyncMock()
    uow.credentials.create = AsyncMock()
    uow.credentials.save = AsyncMock(side_effect=lambda account: account)

    uow.challenges = MagicMock()
    uow.challenges.find_by_account = AsyncMock()
    uow.challenges.find_by_account_and_code = AsyncMock()
    uow.challenges.upsert = AsyncMock()
    uow.challenges.mark_verified = AsyncMock(return_value=True)
    uow.challenges.consume = AsyncMock(return_value=True)
    uow.challenges.delete = AsyncMock(return_value=True)

    return uow
