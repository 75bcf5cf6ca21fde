"""JSON error envelope shared by every API response."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_response(*, status_code: int, message: str) -> JSONResponse:
    """Render one `{"error": message}` body."""

    return JSONResponse(status_code=status_code, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render raised HTTP exceptions, including routing 404/405, as error envelopes."""

    response = error_response(status_code=exc.status_code, message=str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from clients."""

    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return error_response(status_code=500, message="internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to one application."""

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
