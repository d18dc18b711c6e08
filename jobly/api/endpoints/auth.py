"""
Authentication endpoints.

- POST /token: exchange username/password for a JWT
- POST /register: create a (non-admin) account and return a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.user import TokenResponse, UserLoginRequest, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(request: UserLoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate and receive a JWT for use in the Authorization header.

    Raises 401 on an unknown user or wrong password.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    return TokenResponse(token=create_access_token(user["username"], is_admin=user["is_admin"]))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(request: UserRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account.

    Self-registered users are never admins. Returns a JWT for immediate use.
    """
    user = user_crud.register(db, {**request.model_dump(by_alias=True), "isAdmin": False})
    logger.info(f"New user registered: {user['username']}")
    return TokenResponse(token=create_access_token(user["username"], is_admin=False))
