"""Pytest configuration and fixtures for Applytrack tests."""

import os
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""
os.environ["ENABLE_SCHEDULER"] = "false"

from app.clock import utcnow
from app.database import Base, get_db
from app.main import app
from app.models import Interview, JobApplication, User
from app.services.auth import create_session_cookie, hash_password
from app.services.sessions import establish_session

PASSWORD = "Abcdef1!"
COOKIE_NAME = "session_id"


# Use in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Enable foreign key support for SQLite so delete ordering is enforced
@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """Create a test client with database dependency override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, email="ada@example.com", is_verified=True, auto_ghost=False, **fields):
    user = User(
        first_name=fields.pop("first_name", "Ada"),
        last_name=fields.pop("last_name", "Lovelace"),
        gender=fields.pop("gender", "female"),
        email=email,
        password_hash=hash_password(fields.pop("password", PASSWORD)),
        is_verified=is_verified,
        auto_ghost=auto_ghost,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def verified_user(db):
    """Create a verified user."""
    return make_user(db)


@pytest.fixture
def unverified_user(db):
    """Create a user who has not confirmed their email yet."""
    return make_user(db, email="pending@example.com", is_verified=False)


@pytest.fixture
def second_user(db):
    """Create a second verified user for isolation testing."""
    return make_user(db, email="grace@example.com", first_name="Grace", last_name="Hopper")


@pytest.fixture
def session_cookie(db, verified_user):
    """Create a server-side session for the verified user and return its cookie."""
    return create_session_cookie(establish_session(db, verified_user))


@pytest.fixture
def second_user_cookie(db, second_user):
    return create_session_cookie(establish_session(db, second_user))


def make_application(db, user, days_old=0, status="applied", **fields):
    """Create an application last touched ``days_old`` days ago."""
    touched = utcnow() - timedelta(days=days_old)
    application = JobApplication(
        user_id=user.id,
        position_name=fields.pop("position_name", "Backend Engineer"),
        employer_name=fields.pop("employer_name", "Initech"),
        status=status,
        created_at=touched,
        updated_at=touched,
        **fields,
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def make_interview(db, application, interview_date, reminder_sent=False):
    interview = Interview(
        application_id=application.id,
        user_id=application.user_id,
        interview_date=interview_date,
        interview_type="virtual",
        reminder_sent=reminder_sent,
    )
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview


@pytest.fixture
def user_records(db, verified_user):
    """Give the verified user two applications and an interview."""
    first = make_application(db, verified_user)
    second = make_application(db, verified_user, position_name="Data Engineer", employer_name="Globex")
    interview = make_interview(db, first, utcnow() + timedelta(days=3))
    return {"applications": [first, second], "interview": interview}
