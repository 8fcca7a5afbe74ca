import secrets

from src.domain.entities import OTP_LENGTH


def generate_otp(length: int = OTP_LENGTH) -> str:
    """
    Generate a numeric one-time code.

    Drawn uniformly from the full 0..10**length-1 range with a CSPRNG and
    rendered fixed-width, so leading zeros are part of the code.
    """
    return f"{secrets.randbelow(10 ** length):0{length}d}"
