"""
Application errors and their HTTP mapping.

Accessors and dependencies raise these instead of HTTPException so the
data layer stays independent of FastAPI; the handlers registered in
``register_exception_handlers`` turn them into ``{"detail": ...}`` responses.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class JoblyError(Exception):
    """Base exception for all Jobly errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class BadRequestError(JoblyError):
    """Client input cannot be processed (empty update, inverted range, ...)."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class DuplicateError(BadRequestError):
    """A create would violate a uniqueness constraint."""


class NotFoundError(JoblyError):
    """The identified record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class UnauthorizedError(JoblyError):
    """Missing or invalid credentials, or insufficient role."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema violations are client errors: answer 400 rather than FastAPI's 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JoblyError, jobly_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
