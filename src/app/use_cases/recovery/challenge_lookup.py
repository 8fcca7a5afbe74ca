import logging
from datetime import datetime
from typing import Tuple

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, RecoveryChallenge
from src.domain.result import Result, Return
from .errors import INVALID_CODE, OTP_EXPIRED

logger = logging.getLogger(__name__)


async def resolve_live_challenge(
    uow: UnitOfWork, email: str, code: str, now: datetime
) -> Result[Tuple[Account, RecoveryChallenge]]:
    """
    Resolve the account and its challenge matching `code`.

    Must run inside an open unit of work. An expired challenge is deleted
    and committed before OTP_EXPIRED is returned, unless a newer request
    re-issued it first (INVALID_CODE). An unknown email answers
    INVALID_CODE, same as a wrong code.
    """
    account = await uow.credentials.find_by_identifier(email)
    if account is None:
        return Return.err(INVALID_CODE)

    challenge = await uow.challenges.find_by_account_and_code(account.id, code)
    if challenge is None:
        return Return.err(INVALID_CODE)

    if challenge.is_expired(now):
        account_id = account.id
        if not await uow.challenges.delete(challenge.id, code):
            # Re-issued by a newer request; that challenge stays
            await uow.rollback()
            return Return.err(INVALID_CODE)

        await uow.commit()
        logger.info(f"Removed expired recovery challenge for account {account_id}")
        return Return.err(OTP_EXPIRED)

    return Return.ok((account, challenge))
