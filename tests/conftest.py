"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seed data (companies c1-c3, jobs on c1, users u1-u3)
- Tokens for u1, u2 and an admin
"""

import os

# Must be set before jobly.core.config is imported
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("JSON_LOGS", "false")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db
from jobly.core.security import create_token, get_password_hash
from jobly.models import Company, Job, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed(db_session):
    """
    Populate the database and return the ids of the seeded jobs.

    Companies c1..c3 have 1..3 employees. Jobs J1..J3 all belong to c1;
    J3 has no equity. Users u1..u3 have password "password1".."password3".
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db_session.flush()

    jobs = [
        Job(title="J1", salary=100, equity=0.1, company_handle="c1"),
        Job(title="J2", salary=200, equity=0.2, company_handle="c1"),
        Job(title="J3", salary=300, equity=None, company_handle="c1"),
    ]
    db_session.add_all(jobs)

    for n in (1, 2, 3):
        db_session.add(User(
            username=f"u{n}",
            password=get_password_hash(f"password{n}"),
            first_name=f"U{n}F",
            last_name=f"U{n}L",
            email=f"user{n}@user.com",
            is_admin=False,
        ))

    db_session.commit()
    return {"job_ids": [job.id for job in jobs]}


@pytest.fixture
def u1_token():
    return create_token(SimpleNamespace(username="u1", is_admin=False))


@pytest.fixture
def u2_token():
    return create_token(SimpleNamespace(username="u2", is_admin=False))


@pytest.fixture
def admin_token():
    """Token for an admin that does not exist in the database; auth only reads the token."""
    return create_token(SimpleNamespace(username="admin", is_admin=True))


@pytest.fixture
def u1_headers(u1_token):
    return {"Authorization": f"Bearer {u1_token}"}


@pytest.fixture
def u2_headers(u2_token):
    return {"Authorization": f"Bearer {u2_token}"}


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
