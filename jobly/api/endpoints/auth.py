"""
Authentication endpoints.

- POST /auth/token: exchange username/password for a JWT
- POST /auth/register: create a (non-admin) account and return a JWT
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import UserLoginRequest, UserRegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT.

    The token payload carries the username and isAdmin flag; send it back as
    `Authorization: Bearer <token>`.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user.username}")
    return TokenResponse(token=create_token(user))


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account and return a JWT for immediate use.

    Self-registered users are never admins.
    """
    new_user = user_crud.register(db, request, is_admin=False)
    return TokenResponse(token=create_token(new_user))
