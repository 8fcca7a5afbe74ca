"""
Principal

The identity bound to an authenticated request.
"""

from pydantic import BaseModel, ConfigDict


class Principal(BaseModel):
    """Authenticated caller; carries no credential material"""

    model_config = ConfigDict(frozen=True)

    account_id: int
    email: str
