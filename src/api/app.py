import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel
from starlette.middleware import Middleware

from src.adapter.services.smtp_otp_notifier import SmtpOtpNotifier
from src.api.middleware.authentication import AuthenticationMiddleware, RequestAuthenticator
from src.api.utils.jwt import TokenCodec, TokenSettings
from .error import INTERNAL_ERROR_BODY, ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error on {request.url.path}: {exc.base_error.code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error on {request.url.path}: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=exc.to_body()
    )


async def handle_persistence_error(request: Request, exc: SQLAlchemyError):
    logger.error(f"Persistence failure on {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=INTERNAL_ERROR_BODY
    )


def build_lifespan(ApplicationConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.AUTO_CREATE_TABLES:
            from src.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database tables ensured")
        yield

    return lifespan


def create_app(ApplicationConfig, session_factory=None, otp_notifier=None) -> FastAPI:
    from src.depends import AsyncSessionLocal, unit_of_work_factory

    session_factory = session_factory or AsyncSessionLocal
    token_codec = TokenCodec(TokenSettings.from_config(ApplicationConfig))
    authenticator = RequestAuthenticator(token_codec, unit_of_work_factory(session_factory))

    # Outermost first: CORS headers also apply to 401s from authentication
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=ApplicationConfig.CORS_ORIGINS,
            allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        ),
        Middleware(AuthenticationMiddleware, authenticator=authenticator),
    ]

    app = FastAPI(
        title="Account Auth API",
        version="0.1.0",
        middleware=middleware,
        lifespan=build_lifespan(ApplicationConfig),
    )

    app.state.session_factory = session_factory
    app.state.token_codec = token_codec
    app.state.otp_notifier = otp_notifier or SmtpOtpNotifier.from_config(ApplicationConfig)

    from src.api.routes import accounts, auth, health_check, password_recovery

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(password_recovery.router, tags=["Password Recovery"])
    app.include_router(accounts.router, tags=["Accounts"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(SQLAlchemyError, handle_persistence_error)

    return app
