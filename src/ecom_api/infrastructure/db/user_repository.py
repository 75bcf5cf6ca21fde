"""SQLAlchemy adapter for user persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Any, cast

import sqlalchemy as sa
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ecom_api.application.ports.user_repository_port import (
    DuplicateUserEmailError,
    UserCreateInput,
    UserRecord,
    UserRepositoryError,
    UserRepositoryPort,
)
from ecom_api.infrastructure.db.metadata import users

_USER_COLUMNS = (
    users.c.id,
    users.c.first_name,
    users.c.last_name,
    users.c.email,
    users.c.password,
    users.c.created_at,
)


def _is_duplicate_email_error(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "uq_users_email" in message or "users.email" in message


class SqlAlchemyUserRepository(UserRepositoryPort):
    """User repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        """Return user by normalized email or None."""

        statement = sa.select(*_USER_COLUMNS).where(users.c.email == email).limit(1)
        return await self._fetch_one(statement)

    async def get_by_id(self, *, user_id: int) -> UserRecord | None:
        """Return user by id or None."""

        statement = sa.select(*_USER_COLUMNS).where(users.c.id == user_id).limit(1)
        return await self._fetch_one(statement)

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        """Insert a user row and return the persisted record.

        Raises ``DuplicateUserEmailError`` when the email unique constraint rejects
        the row and ``UserRepositoryError`` for any other database failure.
        """

        statement = sa.insert(users).values(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            password=payload.password_hash,
        )

        async with self._session_factory() as session:
            try:
                result = cast(CursorResult[Any], await session.execute(statement))
                user_id = result.inserted_primary_key[0]
                created = await session.execute(
                    sa.select(*_USER_COLUMNS).where(users.c.id == user_id)
                )
                row = created.mappings().one()
                await session.commit()
            except IntegrityError as error:
                await session.rollback()
                if _is_duplicate_email_error(error):
                    raise DuplicateUserEmailError(email=payload.email) from error
                raise UserRepositoryError("failed to insert user") from error
            except SQLAlchemyError as error:
                await session.rollback()
                raise UserRepositoryError("failed to insert user") from error

        return _to_user_record(row)

    async def _fetch_one(self, statement: sa.Select[tuple[object, ...]]) -> UserRecord | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
        except SQLAlchemyError as error:
            raise UserRepositoryError("failed to query users") from error

        row = result.mappings().first()
        if row is None:
            return None
        return _to_user_record(row)


def _to_user_record(row: sa.RowMapping) -> UserRecord:
    return UserRecord(
        user_id=int(row["id"]),
        first_name=cast(str, row["first_name"]),
        last_name=cast(str, row["last_name"]),
        email=cast(str, row["email"]),
        password_hash=cast(str, row["password"]),
        created_at=cast(datetime, row["created_at"]),
    )
