"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real one. Tables are created before each test and dropped after,
and uploaded files go to a per-test temporary directory.
"""

import os

# Settings are read at import time, so point them at test values
# before the application is imported.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-signing-secret-with-enough-length-for-hs256")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from personnel_records.api.deps import get_upload_storage
from personnel_records.config import get_settings
from personnel_records.main import app
from personnel_records.models.base import Base, get_db
from personnel_records.services.auth_service import AuthService
from personnel_records.services.storage import UploadStorage
from personnel_records.services.token_service import TokenService


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def storage(tmp_path):
    return UploadStorage(tmp_path / "uploads")


@pytest.fixture
def tokens():
    return TokenService.from_settings(get_settings())


@pytest.fixture
def client(db_session, storage):
    """
    Provide a test client wired to the test database and a
    temporary uploads directory.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_upload_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db_session, username, email, password="secret123", is_admin=False):
    user = AuthService(db_session).register(
        username=username,
        email=email,
        password=password,
        is_admin=is_admin,
    )
    db_session.commit()
    return user


@pytest.fixture
def admin_user(db_session):
    return make_user(db_session, "admin", "admin@test.com", is_admin=True)


@pytest.fixture
def staff_user(db_session):
    return make_user(db_session, "clerk", "clerk@test.com")


@pytest.fixture
def admin_headers(admin_user, tokens):
    return {"Authorization": f"Bearer {tokens.issue(admin_user.id)}"}


@pytest.fixture
def staff_headers(staff_user, tokens):
    return {"Authorization": f"Bearer {tokens.issue(staff_user.id)}"}
