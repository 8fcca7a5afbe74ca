from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts import AccountResponse, GetAccountUseCase
from src.depends import get_unit_of_work, require_identity
from src.domain.entities import Principal

router = APIRouter(prefix="/accounts", tags=["Accounts"])


async def _load_account(uow: UnitOfWork, account_id: int):
    result = await GetAccountUseCase(uow).execute(account_id)

    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AccountResponse)
async def get_me(
    identity: Principal = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Account

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
    """
    return await _load_account(uow, identity.account_id)


@router.get(
    "/{account_id}", status_code=status.HTTP_200_OK, response_model=AccountResponse
)
async def get_account(
    account_id: int,
    identity: Principal = Depends(require_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Account By ID

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
        - 404 Not Found: No account with this ID
    """
    return await _load_account(uow, account_id)
