"""
Script to create (or promote) an admin account.

Admins can only be created by other admins through the API, so the first
one has to come from here.

Run this script from the project root:
    python create_admin.py <username>
"""

import getpass
import os
import sys

# Add project root to Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from jobly.core.database import SessionLocal
from jobly.core.exceptions import BadRequestError
from jobly.crud import user as user_crud
from jobly.models.user import User
from jobly.schemas.user import UserRegisterRequest


def create_admin(username: str):
    """Create `username` as an admin, or promote the existing user."""
    db = SessionLocal()

    try:
        existing = db.get(User, username)
        if existing is not None:
            if existing.is_admin:
                print(f"{username} is already an admin.")
                return
            confirm = input(f"User {username} exists. Promote to admin? (yes/no): ")
            if confirm.lower() != 'yes':
                print("Canceled.")
                return
            user_crud.update(db, username, {"isAdmin": True})
            print(f"✓ {username} is now an admin")
            return

        request = UserRegisterRequest(
            username=username,
            password=getpass.getpass("Password: "),
            first_name=input("First name: "),
            last_name=input("Last name: "),
            email=input("Email: "),
        )
        user_crud.register(db, request, is_admin=True)
        print(f"✓ Admin {username} created")

    except BadRequestError as e:
        db.rollback()
        print(f"✗ {e.message}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python create_admin.py <username>")
        sys.exit(1)
    create_admin(sys.argv[1])
