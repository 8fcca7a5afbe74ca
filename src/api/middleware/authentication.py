"""
Request authentication

Binds the bearer token's principal to each request before routing.

- No Authorization header, or a non-Bearer scheme: request stays anonymous
- Valid token whose subject resolves to an account: principal bound to
  request.state.identity and the current_identity context
- Anything else: 401 with a generic body; business logic is never reached
- Database failure during the lookup: 500 INTERNAL_ERROR body

Route-level policy (who may be anonymous) is left to dependencies.
"""

import logging
from contextlib import AbstractAsyncContextManager
from contextvars import ContextVar
from typing import Awaitable, Callable, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.api.error import INTERNAL_ERROR_BODY
from src.api.utils.jwt import TokenCodec, TokenError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import LoadIdentityUseCase
from src.domain.entities import Principal

logger = logging.getLogger(__name__)

identity_context: ContextVar[Optional[Principal]] = ContextVar("identity", default=None)

UNAUTHENTICATED_BODY = {
    "error": {"code": "UNAUTHENTICATED", "message": "Invalid or expired token"}
}


def get_current_identity() -> Optional[Principal]:
    """Return the principal bound to the current request, if any"""
    return identity_context.get()


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the credential of a Bearer Authorization header, else None"""
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    credentials = credentials.strip()
    if scheme.lower() != "bearer" or not credentials:
        return None
    return credentials


class Unauthenticated(Exception):
    """Bearer credential present but not acceptable"""


class RequestAuthenticator:
    """
    Resolve an Authorization header to a principal.

    Never mutates accounts or tokens; safe to call concurrently.
    """

    def __init__(
        self,
        token_codec: TokenCodec,
        uow_factory: Callable[[], AbstractAsyncContextManager[UnitOfWork]],
    ):
        self.token_codec = token_codec
        self.uow_factory = uow_factory

    async def authenticate(self, authorization: Optional[str]) -> Optional[Principal]:
        """
        Args:
            authorization: Raw Authorization header value

        Returns:
            Principal, or None for anonymous requests

        Raises:
            Unauthenticated: token rejected or subject no longer exists
        """
        token = extract_bearer_token(authorization)
        if token is None:
            return None

        try:
            subject = self.token_codec.verify(token)
        except TokenError as exc:
            logger.warning(f"Bearer token rejected: {exc.kind}")
            raise Unauthenticated() from exc

        async with self.uow_factory() as uow:
            result = await LoadIdentityUseCase(uow).execute(subject)

        if result.is_err():
            logger.warning("Bearer token subject does not resolve to an account")
            raise Unauthenticated()

        return result.value


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Starlette middleware stage wrapping RequestAuthenticator"""

    def __init__(self, app, authenticator: RequestAuthenticator):
        super().__init__(app)
        self.authenticator = authenticator

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            identity = await self.authenticator.authenticate(
                request.headers.get("Authorization")
            )
        except Unauthenticated:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content=UNAUTHENTICATED_BODY,
                headers={"WWW-Authenticate": "Bearer"},
            )
        except SQLAlchemyError as exc:
            # App exception handlers do not cover middleware
            logger.error(f"Identity lookup failed on {request.url.path}", exc_info=exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=INTERNAL_ERROR_BODY,
            )

        request.state.identity = identity
        token = identity_context.set(identity)
        try:
            return await call_next(request)
        finally:
            identity_context.reset(token)
