"""
Pytest fixtures for testing.

Tests run against an in-memory SQLite database by default. Pass --postgres to
run the same suite against a throwaway PostgreSQL container instead.
"""
import os

# Must be set before any app import that triggers Settings validation
# (db.session builds its engine from get_settings() at import time).
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-at-least-32-characters"
os.environ["BCRYPT_ROUNDS"] = "4"  # minimum cost keeps the suite fast

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.config import Settings, get_settings  # noqa: E402
from core.security import hash_password  # noqa: E402
from models.base import Base  # noqa: E402
from models.bookmark import Bookmark  # noqa: E402
from models.user import User  # noqa: E402
from services.token_service import create_access_token  # noqa: E402

DEFAULT_PASSWORD = "correct-horse-battery"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the --postgres switch."""
    parser.addoption(
        "--postgres",
        action="store_true",
        default=False,
        help="Run database tests against a PostgreSQL testcontainer instead of SQLite.",
    )


@pytest.fixture(scope="session")
def database_url(request: pytest.FixtureRequest) -> Generator[str]:
    """Database URL for the test session: SQLite in memory, or a PostgreSQL container."""
    if not request.config.getoption("--postgres"):
        yield "sqlite+aiosqlite://"
        return

    from testcontainers.postgres import PostgresContainer  # noqa: PLC0415

    with PostgresContainer("postgres:16", driver="asyncpg") as postgres:
        yield postgres.get_connection_url()


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine with a fresh schema for each test."""
    if database_url.startswith("sqlite"):
        # One shared connection, otherwise every checkout sees a new empty database
        engine = create_async_engine(database_url, poolclass=StaticPool)
    else:
        engine = create_async_engine(database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Async session on the per-test schema. Services only flush, so nothing is committed."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings() -> Settings:
    """Settings built from the test environment above."""
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def make_user(
    db_session: AsyncSession,
    settings: Settings,
) -> Callable[..., Awaitable[User]]:
    """Factory that inserts a user directly (bypassing the signup endpoint)."""

    async def _make_user(
        email: str,
        password: str = DEFAULT_PASSWORD,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        user = User(
            email=email,
            password_hash=hash_password(password, settings.bcrypt_rounds),
            first_name=first_name,
            last_name=last_name,
        )
        db_session.add(user)
        await db_session.flush()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
async def user_a(make_user: Callable[..., Awaitable[User]]) -> User:
    """Create the first test user (User A)."""
    return await make_user("user-a@test.com")


@pytest.fixture
async def user_b(make_user: Callable[..., Awaitable[User]]) -> User:
    """Create a second test user (User B) for ownership tests."""
    return await make_user("user-b@test.com")


@pytest.fixture
async def user_a_bookmark(db_session: AsyncSession, user_a: User) -> Bookmark:
    """Create a bookmark belonging to User A."""
    bookmark = Bookmark(
        user_id=user_a.id,
        title="User A's Private Bookmark",
        link="https://user-a-bookmark.example.com/",
        description="Only User A should see this",
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark


@pytest.fixture
async def user_b_bookmark(db_session: AsyncSession, user_b: User) -> Bookmark:
    """Create a bookmark belonging to User B."""
    bookmark = Bookmark(
        user_id=user_b.id,
        title="User B's Bookmark",
        link="https://user-b-bookmark.example.com/",
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark


@pytest.fixture
async def client(
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient]:
    """Create an unauthenticated test client with database session override."""
    # Clear the settings cache so it picks up the test environment
    get_settings.cache_clear()

    from api.main import app  # noqa: PLC0415
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(settings: Settings) -> Callable[[User], dict[str, str]]:
    """Factory for an Authorization header carrying a fresh access token for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id, settings)}"}

    return _auth_headers


@pytest.fixture
async def client_as_user_a(
    client: AsyncClient,
    user_a: User,
    auth_headers: Callable[[User], dict[str, str]],
) -> AsyncClient:
    """Test client authenticated as User A."""
    client.headers.update(auth_headers(user_a))
    return client


@pytest.fixture
async def client_as_user_b(
    db_session: AsyncSession,
    user_b: User,
    auth_headers: Callable[[User], dict[str, str]],
) -> AsyncGenerator[AsyncClient]:
    """
    Separate test client authenticated as User B.

    Shares the app and session override with `client`, so the two can be used
    in the same test.
    """
    from api.main import app  # noqa: PLC0415
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers(user_b),
    ) as user_b_client:
        yield user_b_client

    app.dependency_overrides.clear()
