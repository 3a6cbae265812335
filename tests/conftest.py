"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, users and jobs
- Signed tokens for a regular user and an admin
"""

import os

# Settings are read at import time, so configure them before importing the app
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JSON_LOGS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, enable_sqlite_foreign_keys, execute, get_db
from app.core.security import create_token, get_password_hash
from app.models import Company, Job, User  # noqa: F401
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
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
def seeded_db(db_session):
    """
    Three companies, two users (u1 regular, admin1 admin) and three jobs.
    """
    for handle, name, num_employees in [("c1", "C1", 1), ("c2", "C2", 2), ("c3", "C3", 3)]:
        execute(
            db_session,
            """INSERT INTO companies (handle, name, description, num_employees, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [handle, name, f"Desc{handle[-1]}", num_employees, f"http://{handle}.img"],
        )

    for username, is_admin in [("u1", False), ("admin1", True)]:
        execute(
            db_session,
            """INSERT INTO users (username, password, first_name, last_name, email, is_admin)
               VALUES ($1, $2, $3, $4, $5, $6)""",
            [username, get_password_hash("password1"), "F", "L", f"{username}@email.com", is_admin],
        )

    for title, salary, equity, handle in [
        ("Job1", 100, 0.1, "c1"),
        ("Job2", 200, 0.2, "c1"),
        ("Job3", 300, None, "c2"),
    ]:
        execute(
            db_session,
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, $4)""",
            [title, salary, equity, handle],
        )

    db_session.commit()
    return db_session


@pytest.fixture
def u1_headers():
    return {"Authorization": f"Bearer {create_token('u1', False)}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_token('admin1', True)}"}
