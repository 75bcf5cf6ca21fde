"""Application service for the user registration workflow."""

from __future__ import annotations

import asyncio
import logging

from ecom_api.application.dto.user_models import RegisterUserPayload
from ecom_api.application.ports.password_hasher_port import PasswordHasherPort
from ecom_api.application.ports.user_repository_port import (
    DuplicateUserEmailError,
    UserCreateInput,
    UserRecord,
    UserRepositoryPort,
)
from ecom_api.domain.auth.credentials import normalize_user_email

logger = logging.getLogger(__name__)


class EmailAlreadyRegisteredError(ValueError):
    """Raised when a registration targets an email that already has an account."""

    def __init__(self, *, email: str) -> None:
        super().__init__(f"user with email {email} already exists")
        self.email = email


class RegistrationService:
    """Register new users: duplicate check, password hashing and persistence.

    The duplicate check and the insert are separate statements. Two concurrent
    registrations for one email can both pass the check; the store's unique
    constraint decides the winner and the loser surfaces as
    ``EmailAlreadyRegisteredError``.
    """

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    async def register(self, payload: RegisterUserPayload) -> UserRecord:
        """Create one user account from a validated payload.

        Raises ``EmailAlreadyRegisteredError`` for taken emails; store and hashing
        failures propagate unchanged.
        """

        email = normalize_user_email(email=payload.email)

        existing = await self._users.get_by_email(email=email)
        if existing is not None:
            logger.info("user_registration_rejected reason=duplicate_email")
            raise EmailAlreadyRegisteredError(email=payload.email)

        password_hash = await asyncio.to_thread(
            self._password_hasher.hash_password,
            payload.password,
        )

        try:
            user = await self._users.create_user(
                UserCreateInput(
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                    email=email,
                    password_hash=password_hash,
                )
            )
        except DuplicateUserEmailError as exc:
            logger.info("user_registration_rejected reason=concurrent_duplicate_email")
            raise EmailAlreadyRegisteredError(email=payload.email) from exc

        logger.info("user_registered user_id=%s", user.user_id)
        return user
