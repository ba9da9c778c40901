"""
Application error hierarchy.

Raised from the CRUD layer and the auth dependencies; the handlers registered
in main.py turn them into {"error": {"message": ..., "status": ...}} responses.
"""

from typing import Optional


class AppError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequestError(AppError):
    status_code = 400
    default_message = "Bad Request"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not Found"
