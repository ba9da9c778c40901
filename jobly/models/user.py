"""
User model for authentication.

Users are identified by username; `is_admin` grants access to the
admin-only endpoints.
"""

from sqlalchemy import Column, String, Text, Boolean
from jobly.core.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # Bcrypt hash, never the plain password
    password = Column(Text, nullable=False)

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
