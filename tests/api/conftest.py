"""Fixtures for API tests.

Routes are exercised through TestClient with handlers replaced by stubs
via ``app.dependency_overrides``; no database is touched.
"""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.domain.entities.user import User
from src.main import app
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
    get_token_user,
)


@pytest.fixture(autouse=True)
def clear_overrides():
    """Reset dependency overrides after every test."""
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def override() -> Callable[[Any, Any], None]:
    """Override a dependency with a fixed value."""

    def _override(dependency: Any, value: Any) -> None:
        app.dependency_overrides[dependency] = lambda: value

    return _override


@pytest.fixture
def sign_in_as(override) -> Callable[..., CurrentUser]:
    """Authenticate requests as ``user`` (bypassing token validation)."""

    def _sign_in(user: User, **claims: Any) -> CurrentUser:
        current = CurrentUser(
            user_id=user.id,
            email=user.email,
            roles=[user.role.value],
            token_jti="jti-test",
            **claims,
        )
        override(get_current_user, current)
        override(get_token_user, current)
        return current

    return _sign_in