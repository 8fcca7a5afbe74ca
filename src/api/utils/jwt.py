"""
Bearer token codec

Issues and verifies HS256-signed JWTs carrying {sub, iat, exp}.
Verification is stateless: no datastore lookup is needed.
"""

from datetime import UTC, datetime, timedelta
from typing import Callable

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, SecretStr


class TokenError(Exception):
    """Base class for bearer token failures"""

    kind = "token_error"


class MalformedToken(TokenError):
    """Token cannot be parsed or lacks required claims"""

    kind = "malformed"


class InvalidToken(TokenError):
    """Signature, algorithm or claims rejected"""

    kind = "invalid"


class ExpiredToken(TokenError):
    """Token is past its expiry"""

    kind = "expired"


class TokenSettings(BaseModel):
    """
    Immutable signing configuration handed to TokenCodec.

    The secret is a SecretStr so it never shows up in reprs or logs.
    """

    model_config = ConfigDict(frozen=True)

    secret_key: SecretStr
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(minutes=60)

    @classmethod
    def from_config(cls, config) -> "TokenSettings":
        return cls(
            secret_key=SecretStr(config.JWT_SECRET),
            algorithm=config.JWT_ALGORITHM,
            ttl=timedelta(minutes=config.JWT_EXPIRATION_MINUTES),
        )


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenCodec:
    """
    Issue and verify signed bearer tokens.

    The expected algorithm is pinned by TokenSettings; the token header is
    never trusted to choose it.
    """

    def __init__(self, settings: TokenSettings, clock: Callable[[], datetime] = _utc_now):
        self._settings = settings
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._settings.ttl

    def issue(self, subject: str) -> str:
        """
        Issue a token for a subject identifier

        Args:
            subject: Account login identifier (email)

        Returns:
            JWT string expiring after the configured TTL
        """
        now = self._clock()
        payload = {
            "sub": subject,
            "iat": now,
            "exp": now + self._settings.ttl,
        }
        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def verify(self, token: str) -> str:
        """
        Verify a token and return its subject

        Raises:
            MalformedToken: token or claims cannot be parsed
            InvalidToken: wrong algorithm, bad signature or rejected claims
            ExpiredToken: current time is at or past exp
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as exc:
            raise MalformedToken("Token header could not be decoded") from exc

        if header.get("alg") != self._settings.algorithm:
            raise InvalidToken("Unexpected token algorithm")

        try:
            # Expiry is checked below against the codec clock
            claims = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidToken("Token signature or claims rejected") from exc

        subject = claims.get("sub")
        expires_at = claims.get("exp")
        if not isinstance(subject, str) or not subject:
            raise MalformedToken("Token has no subject")
        if not isinstance(expires_at, (int, float)):
            raise MalformedToken("Token has no expiry")

        if self._clock().timestamp() >= expires_at:
            raise ExpiredToken("Token has expired")

        return subject
