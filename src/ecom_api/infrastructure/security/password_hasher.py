"""Bcrypt password hasher adapter."""

from __future__ import annotations

import bcrypt

from ecom_api.application.ports.password_hasher_port import (
    PasswordHasherPort,
    PasswordHashingError,
)

DEFAULT_BCRYPT_ROUNDS = 10
_BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode_password(password: str) -> bytes:
    # bcrypt input is capped at 72 bytes.
    return password.encode("utf-8")[:_BCRYPT_MAX_PASSWORD_BYTES]


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt."""

    def __init__(self, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    def hash_password(self, password: str) -> str:
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            return bcrypt.hashpw(_encode_password(password), salt).decode("utf-8")
        except (TypeError, ValueError) as exc:
            raise PasswordHashingError("failed to hash password") from exc

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode_password(password), password_hash.encode("utf-8"))
        except ValueError:
            return False
