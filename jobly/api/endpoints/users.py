"""
User management endpoints.

Listing and creating users is admin-only; everything under /users/{username}
is open to that user or an admin.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import CurrentUser, require_admin, require_correct_user_or_admin
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.base import DeletedResponse, changes_from
from jobly.schemas.user import (
    ApplicationResponse,
    UserCreateRequest,
    UserCreatedResponse,
    UserDetailEnvelope,
    UserEnvelope,
    UserListEnvelope,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserCreatedResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    """
    Add a new user, optionally an admin, and return a token for them.

    Not the registration endpoint; this is for admins adding users.
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    token = create_access_token(user["username"], is_admin=user["is_admin"])
    return {"user": user, "token": token}


@router.get("/", response_model=UserListEnvelope)
def list_users(
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    """List all users ordered by username."""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_correct_user_or_admin),
):
    """Retrieve a user with the ids of jobs they applied to."""
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_correct_user_or_admin),
):
    """Partially update a user: { firstName, lastName, password, email }."""
    return {"user": user_crud.update(db, username, changes_from(request))}


@router.delete("/{username}", response_model=DeletedResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_correct_user_or_admin),
):
    """Delete a user."""
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", response_model=ApplicationResponse)
def apply_to_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_correct_user_or_admin),
):
    """Apply the user to a job."""
    user_crud.apply_to_job(db, username, job_id)
    return {"applied": job_id}
