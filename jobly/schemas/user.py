"""
Pydantic schemas for users and authentication.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import List

from jobly.schemas.base import CamelModel, RequestModel


class UserRegisterRequest(RequestModel):
    """Request schema for self-registration (never creates admins)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins creating users, possibly other admins."""
    is_admin: bool = False


class UserUpdateRequest(RequestModel):
    """
    Partial user update.

    The admin flag and username cannot be changed through this schema.
    """
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    password: str = Field(None, min_length=5, max_length=72)
    email: EmailStr = None


class UserLoginRequest(RequestModel):
    """Request schema for obtaining a token."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(CamelModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """User with the ids of the jobs they applied to."""
    jobs: List[int] = []


class UserEnvelope(CamelModel):
    user: UserResponse


class UserDetailEnvelope(CamelModel):
    user: UserDetailResponse


class UserListEnvelope(CamelModel):
    users: List[UserResponse]


class UserCreatedResponse(CamelModel):
    user: UserResponse
    token: str


class ApplicationResponse(BaseModel):
    applied: int
