from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime

import pytest

from ecom_api.application.ports.user_repository_port import UserCreateInput, UserRecord
from ecom_api.application.services.auth_service import AuthOutcome, AuthService


@dataclass
class FakeUserRepository:
    user: UserRecord | None

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        if self.user is None or self.user.email != email:
            return None
        return self.user

    async def get_by_id(self, *, user_id: int) -> UserRecord | None:
        _ = user_id
        return self.user

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        raise AssertionError("login must not create users")


class FakePasswordHasher:
    def __init__(self, *, should_verify: bool) -> None:
        self.should_verify = should_verify
        self.verify_calls: list[tuple[str, str]] = []
        self.hash_calls: list[str] = []
        self.threads: list[int] = []

    def hash_password(self, password: str) -> str:
        self.hash_calls.append(password)
        self.threads.append(threading.get_ident())
        return f"hashed::{password}"

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        self.verify_calls.append((password, password_hash))
        self.threads.append(threading.get_ident())
        return self.should_verify


def _user() -> UserRecord:
    return UserRecord(
        user_id=7,
        first_name="Jane",
        last_name="Roe",
        email="jane@example.com",
        password_hash="hashed::pw",
        created_at=datetime.now(tz=UTC),
    )


@pytest.mark.asyncio
async def test_authenticate_success_returns_user() -> None:
    user = _user()
    hasher = FakePasswordHasher(should_verify=True)
    service = AuthService(users=FakeUserRepository(user=user), password_hasher=hasher)

    result = await service.authenticate(email="jane@example.com", password="pw")

    assert result.outcome is AuthOutcome.SUCCESS
    assert result.user == user
    assert hasher.verify_calls == [("pw", "hashed::pw")]


@pytest.mark.asyncio
async def test_authenticate_matches_email_case_insensitively() -> None:
    user = _user()
    service = AuthService(
        users=FakeUserRepository(user=user),
        password_hasher=FakePasswordHasher(should_verify=True),
    )

    result = await service.authenticate(email="  JANE@example.com ", password="pw")

    assert result.outcome is AuthOutcome.SUCCESS


@pytest.mark.asyncio
async def test_authenticate_invalid_password_returns_invalid_credentials() -> None:
    hasher = FakePasswordHasher(should_verify=False)
    service = AuthService(users=FakeUserRepository(user=_user()), password_hasher=hasher)

    result = await service.authenticate(email="jane@example.com", password="wrong")

    assert result.outcome is AuthOutcome.INVALID_CREDENTIALS
    assert result.user is None
    assert hasher.verify_calls == [("wrong", "hashed::pw")]


@pytest.mark.asyncio
async def test_authenticate_unknown_email_still_runs_one_password_check() -> None:
    hasher = FakePasswordHasher(should_verify=True)
    service = AuthService(users=FakeUserRepository(user=None), password_hasher=hasher)

    result = await service.authenticate(email="ghost@example.com", password="pw")

    assert result.outcome is AuthOutcome.INVALID_CREDENTIALS
    assert result.user is None
    assert len(hasher.verify_calls) == 1
    password, password_hash = hasher.verify_calls[0]
    assert password == "pw"
    assert password_hash != "hashed::pw"
    assert password_hash == f"hashed::{hasher.hash_calls[0]}"


@pytest.mark.asyncio
async def test_authenticate_unknown_email_hashes_placeholder_once() -> None:
    hasher = FakePasswordHasher(should_verify=False)
    service = AuthService(users=FakeUserRepository(user=None), password_hasher=hasher)

    await service.authenticate(email="ghost@example.com", password="one")
    await service.authenticate(email="other@example.com", password="two")

    assert len(hasher.hash_calls) == 1
    assert hasher.verify_calls[0][1] == hasher.verify_calls[1][1]


@pytest.mark.asyncio
async def test_authenticate_runs_password_hasher_off_event_loop_thread() -> None:
    hasher = FakePasswordHasher(should_verify=True)
    service = AuthService(users=FakeUserRepository(user=_user()), password_hasher=hasher)

    await service.authenticate(email="jane@example.com", password="pw")
    await service.authenticate(email="ghost@example.com", password="pw")

    assert len(hasher.threads) == 3
    assert threading.get_ident() not in hasher.threads
