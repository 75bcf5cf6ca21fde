"""Pydantic models for user registration and login payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

PASSWORD_MIN_LENGTH = 3
PASSWORD_MAX_LENGTH = 130
_NON_ADDRESS_CHARACTERS = frozenset("<>()")


def validate_plain_email_address(value: str) -> str:
    """Accept only a bare `user@domain` address and return its normalized form.

    Display names, angle brackets and comments are rejected even when they wrap a
    valid address.
    """

    if any(char.isspace() or char in _NON_ADDRESS_CHARACTERS for char in value):
        raise ValueError("value is not a valid email address: expected user@domain")
    return validate_email(value, check_deliverability=False).normalized


EmailAddress = Annotated[str, AfterValidator(validate_plain_email_address)]


class CamelModel(BaseModel):
    """Base model exchanging camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterUserPayload(CamelModel):
    """Registration request body contract."""

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailAddress
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)


class LoginPayload(CamelModel):
    """Login request body contract."""

    email: EmailAddress
    password: str = Field(min_length=1)


class UserProfileResponse(CamelModel):
    """Public user fields returned after a successful login."""

    id: int
    first_name: str
    last_name: str
    email: str
    created_at: datetime


def format_validation_error(error: ValidationError) -> str:
    """Collapse every field violation into one `field: message` list."""

    violations = []
    for item in error.errors(include_url=False):
        field = ".".join(str(part) for part in item["loc"]) or "body"
        violations.append(f"{field}: {item['msg']}")
    return "invalid payload: " + "; ".join(violations)
