"""
FastAPI dependencies for authentication and authorization.

`authenticate_jwt` only decodes the token. `ensure_logged_in` builds on it,
and `ensure_admin` / `ensure_admin_or_correct_user` build on that; each
rejects the request when the caller lacks the required role. None of them
touch the database, so authorization is decided before any resource is
looked up.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import decode_token

logger = logging.getLogger(__name__)

# Authorization: Bearer <token>; a missing or malformed header is not an error
bearer_scheme = HTTPBearer(auto_error=False)


def authenticate_jwt(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[dict]:
    """
    Return the token payload ({"username", "isAdmin", ...}) if a valid token
    was provided, otherwise None.

    It's not an error if no token was provided or if the token is not valid.
    """
    if not credentials:
        return None

    try:
        return decode_token(credentials.credentials.strip())
    except JWTError:
        logger.info("Ignoring invalid bearer token")
        return None


def ensure_logged_in(user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """Require a logged-in user."""
    if not user or not user.get("username"):
        raise UnauthorizedError()
    return user


def ensure_admin(user: Optional[dict] = Depends(ensure_logged_in)) -> dict:
    """Require a logged-in admin."""
    if not user or user.get("isAdmin") is not True:
        logger.warning(f"Admin access denied for {user.get('username') if user else 'anonymous'}")
        raise UnauthorizedError()
    return user


def ensure_admin_or_correct_user(
    username: str,
    user: Optional[dict] = Depends(ensure_logged_in),
) -> dict:
    """
    Require that the caller is the user named in the path, or an admin.

    `username` is the path parameter of the route this guards.
    """
    if not user or user.get("username") is None:
        raise UnauthorizedError()

    if user["username"] == username or user.get("isAdmin") is True:
        return user

    logger.warning(f"User {user['username']} denied access to user {username}")
    raise UnauthorizedError()
