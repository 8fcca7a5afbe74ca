from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import TokenCodec
from src.app.services.otp_notifier import IOtpNotifier
from src.domain.entities import Principal
from src.domain.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


def unit_of_work_factory(session_factory):
    """Build a callable opening a session-scoped unit of work"""

    @asynccontextmanager
    async def open_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    return open_unit_of_work


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_otp_notifier(request: Request) -> IOtpNotifier:
    return request.app.state.otp_notifier


def get_optional_identity(request: Request) -> Optional[Principal]:
    """Principal bound by AuthenticationMiddleware, or None for anonymous requests"""
    return getattr(request.state, "identity", None)


async def require_identity(
    identity: Optional[Principal] = Depends(get_optional_identity),
) -> Principal:
    """
    Dependency for routes that need an authenticated caller.

    Raises:
        ClientError: 401 if the request is anonymous
    """
    if identity is None:
        raise ClientError(
            Error("AUTHENTICATION_REQUIRED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return identity
