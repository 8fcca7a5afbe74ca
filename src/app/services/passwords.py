"""
Password hashing

bcrypt hashing shared by registration, login and password reset.
"""

import bcrypt

from config import ApplicationConfig


def hash_password(password: str) -> str:
    """Hash a plain text password with bcrypt (cost from BCRYPT_ROUNDS)"""
    password_hash = bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
    )
    return password_hash.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain text password against a stored bcrypt hash"""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def burn_password_check() -> None:
    """Spend one bcrypt round so unknown accounts take as long as known ones"""
    bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS))
