from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class AccountResponse(BaseModel):
    """Public account details; never includes the password hash"""

    id: int
    email: str
    full_name: str
    phone_number: Optional[str]
    role_id: int
    created_at: datetime
    updated_at: datetime
