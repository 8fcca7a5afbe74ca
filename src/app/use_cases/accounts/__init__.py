"""
Account Use Cases
"""

from .get_account_use_case import GetAccountUseCase
from .dtos import AccountResponse

__all__ = [
    "GetAccountUseCase",
    "AccountResponse",
]
