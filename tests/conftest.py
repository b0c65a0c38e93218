"""
Test configuration for the clinic staff portal.
"""
import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import itertools
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_portal.auth.models import User, UserRole
from clinic_portal.auth.repository import ConstraintViolationError
from clinic_portal.auth.service import CredentialService
from clinic_portal.auth.session import SessionVerifier
from clinic_portal.core.security import PasswordHasher, TokenCodec, hash_password
from clinic_portal.database import Base, get_db
from clinic_portal.main import app

TEST_SECRET_KEY = "test-secret-key"
START_TIME = 1_700_000_000.0

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryUserRepository:
    """
    UserRepository kept in dictionaries, for component tests.
    """

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def add(
        self,
        email: str,
        password_hash: str,
        role: UserRole,
        full_name: str = "Test User",
        is_active: bool = True,
    ) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            id=next(self._ids),
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            role=role,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        return user

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return next((user for user in self.users.values() if user.email == email), None)

    def list_users(self) -> List[User]:
        return [self.users[user_id] for user_id in sorted(self.users)]

    def create_user(self, email: str, full_name: str, password_hash: str, role: UserRole) -> User:
        if self.find_by_email(email) is not None:
            raise ConstraintViolationError(email)
        return self.add(email, password_hash, role, full_name=full_name)

    def update_user(self, user_id: int, changes: Dict[str, Any], updated_at: datetime) -> Optional[User]:
        user = self.users.get(user_id)
        if user is None:
            return None
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = updated_at
        return user

    def update_password(self, user_id: int, password_hash: str, updated_at: datetime) -> bool:
        user = self.users.get(user_id)
        if user is None:
            return False
        user.password_hash = password_hash
        user.updated_at = updated_at
        self.delete_sessions_for(user_id)
        return True

    def record_session(self, user_id: int, token: str, expires_at: datetime) -> None:
        self.sessions[token] = {"user_id": user_id, "expires_at": expires_at}

    def delete_session(self, token: str) -> None:
        self.sessions.pop(token, None)

    def delete_sessions_for(self, user_id: int) -> int:
        tokens = [token for token, record in self.sessions.items() if record["user_id"] == user_id]
        for token in tokens:
            del self.sessions[token]
        return len(tokens)

    def sessions_for(self, user_id: int) -> List[str]:
        return [token for token, record in self.sessions.items() if record["user_id"] == user_id]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def hasher():
    return PasswordHasher(iterations=1000)


@pytest.fixture
def codec():
    return TokenCodec(TEST_SECRET_KEY)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo():
    return InMemoryUserRepository()


@pytest.fixture
def verifier(repo, codec, clock):
    return SessionVerifier(repo, codec, clock=clock)


@pytest.fixture
def credential_service(repo, hasher, codec, clock):
    return CredentialService(repo, hasher, codec, clock=clock)


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides = {}


@pytest.fixture
def make_user(db):
    """
    Insert a user row directly and return it.
    """
    def _make_user(
        email: str,
        password: str = "secret1",
        role: UserRole = UserRole.DOCTOR,
        full_name: str = "Test User",
        is_active: bool = True,
    ) -> User:
        user = User(
            email=email,
            full_name=full_name,
            password_hash=hash_password(password),
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def login(client):
    """
    Log in through the API and return the Authorization header.
    """
    def _login(email: str, password: str = "secret1") -> Dict[str, str]:
        response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login
