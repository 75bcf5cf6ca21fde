"""Application authentication service for credential verification."""

from __future__ import annotations

import asyncio
import logging
import secrets
from dataclasses import dataclass
from enum import StrEnum

from ecom_api.application.ports.password_hasher_port import PasswordHasherPort
from ecom_api.application.ports.user_repository_port import UserRecord, UserRepositoryPort
from ecom_api.domain.auth.credentials import normalize_user_email

logger = logging.getLogger(__name__)


class AuthOutcome(StrEnum):
    """Supported authentication outcomes."""

    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class AuthResult:
    """Authentication result model."""

    outcome: AuthOutcome
    user: UserRecord | None = None


class AuthService:
    """Authenticate email/password credentials against stored hashes."""

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._unknown_user_password_hash: str | None = None

    async def authenticate(self, *, email: str, password: str) -> AuthResult:
        """Authenticate user credentials.

        Unknown emails and wrong passwords share the same outcome, and both run one
        password verification.
        """

        normalized_email = normalize_user_email(email=email)
        user = await self._users.get_by_email(email=normalized_email)
        if user is None:
            await asyncio.to_thread(
                self._password_hasher.verify_password,
                password=password,
                password_hash=await self._placeholder_password_hash(),
            )
            logger.info("login_failed reason=unknown_email")
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        is_valid = await asyncio.to_thread(
            self._password_hasher.verify_password,
            password=password,
            password_hash=user.password_hash,
        )
        if not is_valid:
            logger.info("login_failed reason=invalid_password user_id=%s", user.user_id)
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        logger.info("login_success user_id=%s", user.user_id)
        return AuthResult(outcome=AuthOutcome.SUCCESS, user=user)

    async def _placeholder_password_hash(self) -> str:
        """Return a hash of a random secret, built on first use, for unknown emails."""

        if self._unknown_user_password_hash is None:
            self._unknown_user_password_hash = await asyncio.to_thread(
                self._password_hasher.hash_password,
                secrets.token_urlsafe(32),
            )
        return self._unknown_user_password_hash
