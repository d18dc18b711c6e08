"""
FastAPI dependencies for authentication and authorization.

A bearer token is optional on every request; ``get_current_user`` returns
None when it is missing or invalid, and the ``require_*`` dependencies turn
that into a 401 where an endpoint needs it.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Type, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import BaseModel, ValidationError
from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity carried by a validated token."""
    username: str
    is_admin: bool = False


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """
    Extract the user from the JWT, if one was provided.

    Returns None if no token was sent or it fails validation.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        logger.debug("Ignoring invalid bearer token")
        return None

    username = payload.get("sub")
    if username is None:
        return None

    return CurrentUser(username=username, is_admin=bool(payload.get("is_admin", False)))


def require_user(user: Optional[CurrentUser] = Depends(get_current_user)) -> CurrentUser:
    """
    Require any logged-in user.

    Raises:
        UnauthorizedError: If no valid token was provided
    """
    if user is None:
        raise UnauthorizedError()
    return user


def require_admin(user: CurrentUser = Depends(require_user)) -> CurrentUser:
    """
    Require a logged-in admin.

    Raises:
        UnauthorizedError: If not logged in or not an admin
    """
    if not user.is_admin:
        raise UnauthorizedError()
    return user


def require_correct_user_or_admin(
    username: str,
    user: CurrentUser = Depends(require_user),
) -> CurrentUser:
    """
    Require the user named in the ``{username}`` path parameter, or an admin.

    Raises:
        UnauthorizedError: If neither condition holds
    """
    if not (user.is_admin or user.username == username):
        raise UnauthorizedError()
    return user


ModelT = TypeVar("ModelT", bound=BaseModel)


def query_model(model: Type[ModelT]) -> Callable[[Request], ModelT]:
    """
    Dependency that validates the whole query string against ``model``.

    Unlike individual ``Query()`` parameters this rejects unknown keys
    (the model forbids extras) and coerces ``"10"``/``"true"`` to typed values.
    A key given more than once (``?name=a&name=b``) is rejected too.

    Usage:
        @router.get("/")
        def list_jobs(filters: JobFilter = Depends(query_model(JobFilter))): ...
    """
    def dependency(request: Request) -> ModelT:
        repeated = [
            {
                "type": "repeated_key",
                "loc": ("query", key),
                "msg": "Query parameter may only be given once",
                "input": request.query_params.getlist(key),
            }
            for key in request.query_params.keys()
            if len(request.query_params.getlist(key)) > 1
        ]
        if repeated:
            raise RequestValidationError(repeated)

        try:
            return model.model_validate(dict(request.query_params))
        except ValidationError as e:
            raise RequestValidationError(e.errors())

    return dependency
