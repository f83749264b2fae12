"""Tests for the route registry and route generation.

Tests cover:
- Every registry entry produces exactly one application route
- Auth levels of the public and token-only routes
- Duplicate method and path rejected at registration
"""

import pytest
from fastapi import APIRouter

from src.main import app
from src.presentation.routers.api.v1.routes.generator import (
    register_routes_from_registry,
)
from src.presentation.routers.api.v1.routes.metadata import AuthLevel
from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY


def _entry(method: str, path: str):
    return next(
        entry
        for entry in ROUTE_REGISTRY
        if entry.method.value == method and entry.path == path
    )


@pytest.mark.api
class TestRouteRegistry:
    """ROUTE_REGISTRY contents."""

    def test_registry_routes_mounted_under_v1(self):
        paths = app.openapi()["paths"]

        for entry in ROUTE_REGISTRY:
            operations = paths[f"/api/v1{entry.path}"]
            assert entry.method.value.lower() in operations

    def test_sign_in_is_public(self):
        assert _entry("POST", "/sessions").auth_policy.level == AuthLevel.PUBLIC

    def test_stop_impersonation_skips_session_validation(self):
        entry = _entry("DELETE", "/admin/impersonations/current")

        assert entry.auth_policy.level == AuthLevel.TOKEN_ONLY

    def test_other_routes_require_authentication(self):
        protected = [
            entry
            for entry in ROUTE_REGISTRY
            if entry.path not in ("/sessions", "/admin/impersonations/current")
        ]

        assert protected
        assert all(
            entry.auth_policy.level == AuthLevel.AUTHENTICATED for entry in protected
        )

    def test_duplicate_route_rejected(self):
        entry = _entry("GET", "/users")

        with pytest.raises(ValueError, match="Duplicate route: GET /users"):
            register_routes_from_registry(APIRouter(), [entry, entry])
