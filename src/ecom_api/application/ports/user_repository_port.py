"""Port for user persistence operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


class UserRepositoryError(RuntimeError):
    """Raised when the user store cannot complete a query or write."""


class DuplicateUserEmailError(UserRepositoryError):
    """Raised when an insert collides with an existing user email."""

    def __init__(self, *, email: str) -> None:
        super().__init__(f"user with email {email} already exists")
        self.email = email


@dataclass(frozen=True)
class UserCreateInput:
    """Input payload for inserting one user row."""

    first_name: str
    last_name: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class UserRecord:
    """User persistence model."""

    user_id: int
    first_name: str
    last_name: str
    email: str
    password_hash: str
    created_at: datetime


class UserRepositoryPort(Protocol):
    """User repository contract.

    Lookups return ``None`` when no row matches; store failures raise
    ``UserRepositoryError``.
    """

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        """Return user by normalized email or None."""

    async def get_by_id(self, *, user_id: int) -> UserRecord | None:
        """Return user by id or None."""

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        """Insert one user row and return the persisted record."""
