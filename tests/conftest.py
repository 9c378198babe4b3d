"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seed companies, jobs and users
- Auth tokens for a regular user and an admin
"""

import os

# Cheap hashing for tests; must be set before app.core.config is imported
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SECRET_KEY", "secret-test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_token, get_password_hash
from app.models.company import Company
from app.models.job import Job
from app.models.user import User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


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
def seed_data(db_session):
    """
    Companies c1-c3, jobs j1-j4 and users u1 (regular), u2 (regular), u4 (admin).

    Returns a dict mapping job title to job id.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db_session.flush()

    jobs = [
        Job(title="j1", salary=1, equity=0.1, company_handle="c1"),
        Job(title="j2", salary=2, equity=0.5, company_handle="c1"),
        Job(title="j3", salary=3, equity=0, company_handle="c2"),
        Job(title="j4", salary=None, equity=None, company_handle="c2"),
    ]
    db_session.add_all(jobs)

    db_session.add_all([
        User(username="u1", password=get_password_hash("password1"), first_name="U1F",
             last_name="U1L", email="user1@user.com", is_admin=False),
        User(username="u2", password=get_password_hash("password2"), first_name="U2F",
             last_name="U2L", email="user2@user.com", is_admin=False),
        User(username="u4", password=get_password_hash("password4"), first_name="U4F",
             last_name="U4L", email="user4@user.com", is_admin=True),
    ])
    db_session.commit()

    return {job.title: job.id for job in jobs}


@pytest.fixture
def u1_headers():
    """Bearer header for the regular user u1"""
    token = create_token({"username": "u1", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    """Bearer header for the admin user u4"""
    token = create_token({"username": "u4", "isAdmin": True})
    return {"Authorization": f"Bearer {token}"}
