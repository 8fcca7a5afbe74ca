import pytest
from datetime import datetime

from src.app.use_cases.accounts import GetAccountUseCase
from src.app.use_cases.auth import LoadIdentityUseCase
from src.domain.entities import Account, Principal


@pytest.fixture
def account():
    return Account(
        id=3,
        email="a@x.com",
        password_hash="hash",
        full_name="A",
        created_at=datetime(2026, 1, 1),
        updated_at=datetime(2026, 1, 2),
    )


@pytest.mark.asyncio
async def test_get_account(mock_uow, account):
    mock_uow.credentials.get_by_id.return_value = account

    result = await GetAccountUseCase(mock_uow).execute(3)

    assert result.is_ok()
    assert result.value.email == "a@x.com"
    assert "password_hash" not in result.value.model_dump()


@pytest.mark.asyncio
async def test_get_account_not_found(mock_uow):
    mock_uow.credentials.get_by_id.return_value = None

    result = await GetAccountUseCase(mock_uow).execute(99)

    assert result.is_err()
    assert result.error.code == "ACCOUNT_NOT_FOUND"
    assert result.error.message == "Account not found with ID: 99"


@pytest.mark.asyncio
async def test_load_identity(mock_uow, account):
    mock_uow.credentials.find_by_identifier.return_value = account

    result = await LoadIdentityUseCase(mock_uow).execute("a@x.com")

    assert result.value == Principal(account_id=3, email="a@x.com")


@pytest.mark.asyncio
async def test_load_identity_missing_account(mock_uow):
    mock_uow.credentials.find_by_identifier.return_value = None

    result = await LoadIdentityUseCase(mock_uow).execute("gone@x.com")

    assert result.is_err()
    assert result.error.code == "ACCOUNT_NOT_FOUND"
