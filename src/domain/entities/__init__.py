"""
Domain Entities

Persistent entities and the request-bound principal.
"""

from .account import Account
from .principal import Principal
from .recovery_challenge import OTP_LENGTH, OTP_TTL, RecoveryChallenge

__all__ = [
    "Account",
    "Principal",
    "RecoveryChallenge",
    "OTP_LENGTH",
    "OTP_TTL",
]
