"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.session import AuthenticatedUser, PrincipalKind
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import FirebaseIdentity
from infrastructure.database.models import Base, UserModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, one shared connection per engine)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = "firebase-uid-test-user"

# Firebase ID tokens the fake verifier accepts
VALID_FIREBASE_TOKEN = "valid-firebase-id-token"
FIREBASE_IDENTITY = FirebaseIdentity(
    uid="firebase-uid-asha",
    email="asha@example.com",
    name="Asha Rani Sharma",
    picture="https://example.com/asha.png",
)


class FakeIdentityVerifier:
    """Identity verifier accepting a fixed set of tokens."""

    def __init__(self, identities: dict[str, FirebaseIdentity] | None = None) -> None:
        self.identities = identities or {VALID_FIREBASE_TOKEN: FIREBASE_IDENTITY}
        self.calls: list[str] = []

    async def verify(self, token: str) -> FirebaseIdentity | None:
        self.calls.append(token)
        return self.identities.get(token)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh test database engine with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # SQLite leaves foreign keys (and ON DELETE CASCADE) off unless asked
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """UoW factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def identity_verifier() -> FakeIdentityVerifier:
    """Fake Firebase verifier."""
    return FakeIdentityVerifier()


@pytest.fixture
def test_user() -> AuthenticatedUser:
    """The caller used by authenticated_client."""
    now = datetime.utcnow()
    return AuthenticatedUser(
        id=TEST_USER_ID,
        email="test@example.com",
        name="Test User",
        issued_at=now,
        expires_at=now + timedelta(days=7),
        kind=PrincipalKind.FIREBASE,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    identity_verifier: FakeIdentityVerifier,
    auth_provider: JWTAuthProvider,
) -> FastAPI:
    """
    Create the app with services bound to the test database.

    Authentication is real: cookies go through the session store and
    bearer tokens through the HS256 test provider.
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import (
        get_auth_service,
        get_seller_profile_service,
        get_user_service,
    )
    from domain.services.auth_service import AuthService
    from domain.services.seller_profile_service import SellerProfileService
    from domain.services.user_service import UserService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_auth_service] = lambda: AuthService(
        uow_factory, identity_verifier=identity_verifier
    )
    app.dependency_overrides[get_user_service] = lambda: UserService(uow_factory)
    app.dependency_overrides[get_seller_profile_service] = lambda: SellerProfileService(
        uow_factory
    )
    app.dependency_overrides[get_async_session] = override_get_async_session
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(
    app: FastAPI,
    session_factory: async_sessionmaker[AsyncSession],
    test_user: AuthenticatedUser,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated test client.

    This client:
    - Uses an in-memory SQLite database
    - Injects a buyer row for the test user into the database
    - Overrides auth dependency to return the test user
    """
    from api.dependencies.auth import get_current_user

    async with session_factory() as session:
        session.add(
            UserModel(
                id=test_user.id,
                email=test_user.email,
                first_name="Test",
                last_name="User",
                role="buyer",
            )
        )
        await session.commit()

    async def override_get_user() -> AuthenticatedUser:
        return test_user

    app.dependency_overrides[get_current_user] = override_get_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
