"""Pytest configuration shared by all test suites.

Settings are read from the environment when ``src.core.config`` is first
imported, so the test environment is set here before any application module
is loaded:

1. In-memory SQLite (aiosqlite) instead of PostgreSQL
2. A fixed 256-bit signing key
3. bcrypt cost 4 so hashing stays fast
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdef-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_JSON", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from src.domain.entities.user import User  # noqa: E402
from src.domain.enums import UserRole  # noqa: E402
from src.infrastructure.persistence.database import Database  # noqa: E402
from tests.utils.factories import create_test_user  # noqa: E402


@pytest.fixture
def admin_user() -> User:
    """Active system administrator."""
    return create_test_user(
        email="admin@example.com",
        first_name="Ada",
        last_name="Admin",
        role=UserRole.SYSTEM_ADMIN,
    )


@pytest.fixture
def other_admin() -> User:
    """A second administrator (cannot be impersonated)."""
    return create_test_user(
        email="grace@example.com",
        first_name="Grace",
        last_name="Hopper",
        role=UserRole.SYSTEM_ADMIN,
    )


@pytest.fixture
def regular_user() -> User:
    """Active user with the default role."""
    return create_test_user(
        email="user@example.com",
        first_name="Linus",
        last_name="User",
    )


@pytest_asyncio.fixture
async def test_database():
    """Fresh in-memory database with all tables created.

    aiosqlite keeps a single shared connection for ``:memory:`` URLs, so
    every session opened from this Database sees the same tables.
    """
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.create_all()
    yield database
    await database.close()
