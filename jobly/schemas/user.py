"""
Pydantic schemas for users and authentication.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional


class UserRegisterRequest(BaseModel):
    """Request schema for self-registration (never an admin)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=25)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=25)
    email: EmailStr

    class Config:
        populate_by_name = True
        extra = "forbid"
        strict = True


class UserCreateRequest(UserRegisterRequest):
    """Request schema for admins creating a user, possibly another admin."""
    is_admin: bool = Field(False, alias="isAdmin")


class UserUpdateRequest(BaseModel):
    """Partial update of a user's profile; username and admin flag cannot change here."""
    first_name: Optional[str] = Field(None, alias="firstName", min_length=1, max_length=25)
    last_name: Optional[str] = Field(None, alias="lastName", min_length=1, max_length=25)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None

    @field_validator("first_name", "last_name", "password", "email")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    class Config:
        populate_by_name = True
        extra = "forbid"
        strict = True


class UserLoginRequest(BaseModel):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)

    class Config:
        extra = "forbid"
        strict = True


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no password)."""
    username: str
    first_name: str = Field(..., serialization_alias="firstName")
    last_name: str = Field(..., serialization_alias="lastName")
    email: str
    is_admin: bool = Field(..., serialization_alias="isAdmin")

    class Config:
        from_attributes = True


class UserDetailResponse(BaseModel):
    user: UserResponse


class UserCreateResponse(BaseModel):
    user: UserResponse
    token: str


class UserListResponse(BaseModel):
    users: List[UserResponse]


class UserDeleteResponse(BaseModel):
    deleted: str
