"""
CRUD operations for User model, plus password authentication.
"""

import logging
from typing import Any, List, Mapping

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import sql_for_partial_update
from jobly.models.user import User
from jobly.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Return the user if username/password match.

    Raises:
        UnauthorizedError: If the user is missing or the password is wrong
    """
    user = db.get(User, username)
    if user and verify_password(password, user.password):
        return user

    logger.warning(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, user_data: UserRegisterRequest, is_admin: bool = False) -> User:
    """
    Create a user with a hashed password.

    Raises:
        BadRequestError: If the username is taken
    """
    if db.get(User, user_data.username) is not None:
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    new_user = User(
        username=user_data.username,
        password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=is_admin,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.username} (admin: {new_user.is_admin})")
    return new_user


def find_all(db: Session) -> List[User]:
    """List all users ordered by username."""
    return db.query(User).order_by(User.username).all()


def get(db: Session, username: str) -> User:
    """
    Retrieve a user by username.

    Raises:
        NotFoundError: If no such user
    """
    user = db.get(User, username)
    if not user:
        raise NotFoundError(f"No user: {username}")
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> User:
    """
    Partially update a user.

    Args:
        data: Any of firstName, lastName, password, email, isAdmin.
            A new password is hashed before it is stored.

    Raises:
        BadRequestError: If `data` is empty or violates a constraint
        NotFoundError: If no such user
    """
    data = dict(data)
    if data.get("password") is not None:
        data["password"] = get_password_hash(data["password"])

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    query_sql = text(f'UPDATE users SET {set_cols} WHERE "username" = :username')

    try:
        result = db.execute(query_sql, {**values, "username": username})
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected update for user {username}: {e.orig}")
        raise BadRequestError(f"Invalid update for user {username}")

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data)}")
    return get(db, username)


def remove(db: Session, username: str) -> None:
    """
    Delete a user.

    Raises:
        NotFoundError: If no such user
    """
    user = get(db, username)
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {username}")
