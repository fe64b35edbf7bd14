"""
Test configuration and fixtures.

Provides:
- Fresh in-memory SQLite schema per test
- Staff, admin and participant users
- Session token minting for authenticated tests
- HTTPX AsyncClient with cookie and CSRF header
"""
import os
import uuid
from dataclasses import dataclass
from typing import AsyncGenerator, Generator

# Must be set before the app (and its settings) are imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["TESTING"] = "1"
os.environ.setdefault("ENV", "test")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from surrogacy_admin.core.config import settings
from surrogacy_admin.core.deps import COOKIE_NAME, get_db
from surrogacy_admin.core.security import create_session_token
from surrogacy_admin.db.base import Base
from surrogacy_admin.db.enums import ParticipantStatus, UserRole
from surrogacy_admin.db.models import User
from surrogacy_admin.db.session import SessionLocal, engine
from surrogacy_admin.main import app

CSRF_HEADERS = {"X-Requested-With": "XMLHttpRequest"}


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Session over a freshly created schema.

    App code commits freely; the schema is dropped after each test.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def media_root(tmp_path, monkeypatch):
    """Keep uploaded files inside the test's temp dir."""
    root = tmp_path / "media"
    monkeypatch.setattr(settings, "MEDIA_ROOT", str(root))
    monkeypatch.setattr(settings, "MEDIA_BASE_URL", "http://test/media")
    return root


def _make_user(db: Session, role: UserRole, **fields) -> User:
    user = User(
        id=uuid.uuid4(),
        role=role.value,
        email=fields.pop("email", f"{role.name.lower()}-{uuid.uuid4().hex[:8]}@test.com"),
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def user_factory(db: Session):
    """Create extra users: user_factory(UserRole.SURROGATE, email=...)."""
    def factory(role: UserRole, **fields) -> User:
        return _make_user(db, role, **fields)
    return factory


@pytest.fixture(scope="function")
def staff_user(db: Session) -> User:
    return _make_user(db, UserRole.AGENCY_STAFF, first_name="Casey", last_name="Staff")


@pytest.fixture(scope="function")
def admin_user(db: Session) -> User:
    return _make_user(db, UserRole.ADMIN, first_name="Robin", last_name="Admin")


@pytest.fixture(scope="function")
def surrogate(db: Session) -> User:
    return _make_user(
        db,
        UserRole.SURROGATE,
        status=ParticipantStatus.NEW_APPLICATION.value,
        form_data={"firstName": "Jamie", "lastName": "Carrier", "city": "Austin", "state": "TX"},
    )


@pytest.fixture(scope="function")
def intended_parent(db: Session) -> User:
    return _make_user(
        db,
        UserRole.INTENDED_PARENT,
        status=ParticipantStatus.NEW_INQUIRY.value,
        parent1={"name": "Morgan Parent"},
    )


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str
    cookie_name: str = COOKIE_NAME


def make_auth(user: User) -> TestAuth:
    token = create_session_token(
        user_id=user.id,
        role=user.role,
        token_version=user.token_version,
    )
    return TestAuth(user=user, token=token)


@pytest.fixture(scope="function")
def test_auth(staff_user: User) -> TestAuth:
    return make_auth(staff_user)


@pytest.fixture(scope="function")
def token_for():
    """Mint a session token for any user."""
    return lambda user: make_auth(user).token


# =============================================================================
# Client Fixtures
# =============================================================================

async def _client(db: Session, cookies: dict | None = None, headers: dict | None = None):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            cookies=cookies,
            headers=headers,
        ) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated client."""
    async for c in _client(db):
        yield c


@pytest.fixture(scope="function")
async def authed_client(db: Session, test_auth: TestAuth) -> AsyncGenerator[AsyncClient, None]:
    """Staff client with session cookie and CSRF header."""
    async for c in _client(db, {test_auth.cookie_name: test_auth.token}, CSRF_HEADERS):
        yield c


@pytest.fixture(scope="function")
async def admin_client(db: Session, admin_user: User) -> AsyncGenerator[AsyncClient, None]:
    auth = make_auth(admin_user)
    async for c in _client(db, {auth.cookie_name: auth.token}, CSRF_HEADERS):
        yield c
