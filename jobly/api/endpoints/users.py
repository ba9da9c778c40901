"""
User management endpoints.

Listing and creating users is admin-only; reading, updating and deleting a
single user is allowed for that user or an admin.
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin, ensure_admin_or_correct_user
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserResponse,
    UserDetailResponse,
    UserCreateResponse,
    UserListResponse,
    UserDeleteResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserCreateResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Add a new user. Admin only; the new user may itself be an admin.

    This is not the registration endpoint; see POST /auth/register.

    Returns the new user and a token for it.
    """
    user = user_crud.register(db, request, is_admin=request.is_admin)
    logger.info(f"Admin {admin['username']} created user {user.username}")
    return {"user": UserResponse.model_validate(user), "token": create_token(user)}


@router.get("", response_model=UserListResponse)
def list_users(
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """List all users. Admin only."""
    users = user_crud.find_all(db)
    return {"users": [UserResponse.model_validate(u) for u in users]}


@router.get("/{username}", response_model=UserDetailResponse)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_admin_or_correct_user)
):
    """Retrieve a user. Admin or the same user."""
    user = user_crud.get(db, username)
    return {"user": UserResponse.model_validate(user)}


@router.patch("/{username}", response_model=UserDetailResponse)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_admin_or_correct_user)
):
    """
    Partially update a user. Admin or the same user.

    Body: any of { firstName, lastName, password, email }
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    user = user_crud.update(db, username, data)
    return {"user": UserResponse.model_validate(user)}


@router.delete("/{username}", response_model=UserDeleteResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_admin_or_correct_user)
):
    """Delete a user. Admin or the same user."""
    user_crud.remove(db, username)
    return {"deleted": username}
