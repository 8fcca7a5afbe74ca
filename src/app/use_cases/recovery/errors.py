"""Recovery flow errors shared by the verify and reset steps"""

from src.domain.result import Error

INVALID_CODE = Error("INVALID_CODE", "Invalid OTP.")
OTP_EXPIRED = Error("OTP_EXPIRED", "OTP has expired. Please request a new one.")
OTP_ALREADY_USED = Error("OTP_ALREADY_USED", "OTP has already been used.")
OTP_NOT_VERIFIED = Error(
    "OTP_NOT_VERIFIED", "OTP has not been verified. Please verify the OTP first."
)
