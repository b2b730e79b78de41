"""
Shared test fixtures.

Each test gets its own SQLite database file under ``tmp_path`` so tests
never see each other's rows.
"""

import pytest
from fastapi.testclient import TestClient

from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from auth.service import AuthService
from auth.store import UserStore
from config.settings import Settings
from database.session import build_engine, build_session_factory, create_tables

TEST_JWT_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'bookstore.db'}",
        jwt_secret=TEST_JWT_SECRET,
        jwt_expiry_seconds=3600,
        bcrypt_rounds=4,
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
        google_callback_url="http://testserver/api/auth/google/callback",
        oauth_success_url="http://frontend.test/auth/success",
        oauth_state_secret="test-state-secret",
    )


@pytest.fixture
async def session(settings):
    engine = build_engine(settings)
    await create_tables(engine)
    factory = build_session_factory(engine)
    async with factory() as db:
        yield db
    await engine.dispose()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenIssuer:
    return TokenIssuer(TEST_JWT_SECRET, 3600)


@pytest.fixture
def store(session) -> UserStore:
    return UserStore(session)


@pytest.fixture
def auth_service(store, hasher, tokens) -> AuthService:
    return AuthService(store, hasher, tokens)


@pytest.fixture
def app(settings):
    from main import create_app

    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client

