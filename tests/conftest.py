"""Pytest configuration and fixtures."""

import os

# Settings are read at import time, so the environment has to be ready first
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, engine_options, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models.enums import Role  # noqa: E402
from src.models.feedback import Feedback  # noqa: E402
from src.models.user import User  # noqa: E402
from src.services.tokens import TokenService  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id, email and role."""

    def __init__(
        self,
        *args,
        user_id: int | None = None,
        email: str | None = None,
        role: Role = Role.USER,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.role = role


# Use test database - PostgreSQL in Docker, SQLite locally
if os.environ["DATABASE_URL"].startswith("postgresql"):
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"].replace("/feedback", "/feedback_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_options(SQLALCHEMY_DATABASE_URL))
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def token_service():
    return TokenService(secret=os.environ["JWT_SECRET"])


def register_and_login(client, email: str, password: str = "testpass123", name: str = "Test User"):
    """Register through the API and return the login payload."""
    response = client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password, "password_confirm": password},
    )
    assert response.status_code == 201
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["data"]


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    data = register_and_login(client, "test@example.com")
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def admin_headers(client, db, token_service):
    """Create an admin account directly in the database and return its auth headers."""
    admin = _create_user(db, "admin@example.com", name="Admin", role=Role.ADMIN)
    token = token_service.generate_token(admin.id, Role.ADMIN)
    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=admin.id,
        email=admin.email,
        role=Role.ADMIN,
    )


def _create_user(db, email: str, name: str = "Someone", role: Role = Role.USER) -> User:
    """Insert a user without going through password hashing."""
    user = User(name=name, email=email, password_hash="not-a-real-hash", role=role.value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _create_feedback(
    db,
    user: User,
    rating: int = 4,
    source: str = "web",
    created_at=None,
    comment: str = "Solid experience",
) -> Feedback:
    """Insert a feedback record, optionally backdated."""
    feedback = Feedback(rating=rating, comment=comment, source=source, created_by=user.id)
    if created_at is not None:
        feedback.created_at = created_at
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback


@pytest.fixture
def create_user(db):
    """Factory fixture for users inserted straight into the database."""

    def factory(email: str, **kwargs) -> User:
        return _create_user(db, email, **kwargs)

    return factory


@pytest.fixture
def create_feedback(db):
    """Factory fixture for feedback inserted straight into the database."""

    def factory(user: User, **kwargs) -> Feedback:
        return _create_feedback(db, user, **kwargs)

    return factory
