"""FastAPI router for user registration and login endpoints."""

from __future__ import annotations

import logging
from typing import TypeVar

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel, ValidationError

from ecom_api.application.dto.user_models import (
    LoginPayload,
    RegisterUserPayload,
    UserProfileResponse,
    format_validation_error,
)
from ecom_api.application.ports.password_hasher_port import PasswordHashingError
from ecom_api.application.ports.user_repository_port import UserRepositoryError
from ecom_api.application.services.auth_service import AuthOutcome, AuthService
from ecom_api.application.services.registration_service import (
    EmailAlreadyRegisteredError,
    RegistrationService,
)

API_PREFIX = "/api/v1"
logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


async def _parse_payload(request: Request, model: type[PayloadT]) -> PayloadT:
    """Decode and validate a JSON request body, mapping failures to 400."""

    raw_body = await request.body()
    if not raw_body.strip():
        raise HTTPException(status_code=400, detail="missing request body")

    try:
        return model.model_validate_json(raw_body)
    except ValidationError as error:
        raise HTTPException(status_code=400, detail=format_validation_error(error)) from error


def build_user_router(
    *,
    registration_service: RegistrationService,
    auth_service: AuthService,
) -> APIRouter:
    """Build router exposing `/register` and `/login` under the API prefix."""

    router = APIRouter(prefix=API_PREFIX, tags=["users"])

    @router.post("/register", status_code=201)
    async def register(request: Request) -> Response:
        payload = await _parse_payload(request, RegisterUserPayload)

        try:
            await registration_service.register(payload)
        except EmailAlreadyRegisteredError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except PasswordHashingError as exc:
            logger.exception("user_registration_failed reason=password_hashing")
            raise HTTPException(status_code=500, detail="failed to hash password") from exc
        except UserRepositoryError as exc:
            logger.exception("user_registration_failed reason=store_error")
            raise HTTPException(status_code=500, detail="failed to register user") from exc

        return Response(status_code=201)

    @router.post("/login", response_model=UserProfileResponse)
    async def login(request: Request) -> UserProfileResponse:
        payload = await _parse_payload(request, LoginPayload)

        try:
            result = await auth_service.authenticate(
                email=payload.email,
                password=payload.password,
            )
        except UserRepositoryError as exc:
            logger.exception("login_error reason=store_error")
            raise HTTPException(status_code=500, detail="failed to authenticate user") from exc
        except PasswordHashingError as exc:
            logger.exception("login_error reason=password_hashing")
            raise HTTPException(status_code=500, detail="failed to authenticate user") from exc

        if result.outcome is not AuthOutcome.SUCCESS or result.user is None:
            raise HTTPException(status_code=401, detail="invalid email or password")

        user = result.user
        return UserProfileResponse(
            id=user.user_id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            created_at=user.created_at,
        )

    return router
