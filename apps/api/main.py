"""API entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ecom_api.application.ports.password_hasher_port import PasswordHasherPort
from ecom_api.application.services.auth_service import AuthService
from ecom_api.application.services.registration_service import RegistrationService
from ecom_api.config.settings import load_settings
from ecom_api.infrastructure.db.session import (
    create_schema,
    create_session_factory,
    dispose_session_factory,
)
from ecom_api.infrastructure.db.user_repository import SqlAlchemyUserRepository
from ecom_api.infrastructure.http.error_handlers import register_error_handlers
from ecom_api.infrastructure.http.user_router import build_user_router
from ecom_api.infrastructure.logging import configure_logging
from ecom_api.infrastructure.security.password_hasher import BcryptPasswordHasher

API_HOST = "0.0.0.0"
logger = logging.getLogger(__name__)


def build_registration_service(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    password_hasher: PasswordHasherPort,
) -> RegistrationService:
    """Build registration service with SQLAlchemy-backed dependencies."""

    return RegistrationService(
        users=SqlAlchemyUserRepository(session_factory),
        password_hasher=password_hasher,
    )


def build_auth_service(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    password_hasher: PasswordHasherPort,
) -> AuthService:
    """Build authentication service with SQLAlchemy-backed dependencies."""

    return AuthService(
        users=SqlAlchemyUserRepository(session_factory),
        password_hasher=password_hasher,
    )


def create_app(
    *,
    database_url: str | None = None,
    registration_service: RegistrationService | None = None,
    auth_service: AuthService | None = None,
    password_hasher: PasswordHasherPort | None = None,
) -> FastAPI:
    """Create FastAPI app serving the `/api/v1` user endpoints."""

    if database_url is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)
        database_url = settings.database_url

    session_factory = create_session_factory(database_url)
    if password_hasher is None:
        password_hasher = BcryptPasswordHasher()
    if registration_service is None:
        registration_service = build_registration_service(
            session_factory,
            password_hasher=password_hasher,
        )
    if auth_service is None:
        auth_service = build_auth_service(session_factory, password_hasher=password_hasher)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await create_schema(session_factory)
        logger.info("database_schema_ready")
        yield
        await dispose_session_factory(session_factory)

    app = FastAPI(lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(
        build_user_router(
            registration_service=registration_service,
            auth_service=auth_service,
        )
    )
    return app


def run_asgi_server(*, host: str = API_HOST, port: int | None = None) -> None:
    """Run the API as a long-lived ASGI process using application factory mode."""

    settings = load_settings()
    log_level = configure_logging(level=settings.log_level)
    resolved_port = settings.port if port is None else port
    logger.info("api_listening public_host=%s port=%s", settings.public_host, resolved_port)
    uvicorn.run(
        "apps.api.main:create_app",
        host=host,
        port=resolved_port,
        log_level=log_level.lower(),
        factory=True,
    )


def main() -> None:
    """Run API runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
