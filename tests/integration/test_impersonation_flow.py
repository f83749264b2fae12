"""End-to-end impersonation flow over HTTP with a real database.

Only the database session is overridden (in-memory SQLite); handlers,
repositories, password hashing and JWTs are the production ones.

Flow:
1. Administrator signs in
2. Starts impersonating a user
3. Acts as the user while policies still see the administrator
4. Stops, receiving an administrator token again
5. The impersonation token is rejected afterwards
6. The audit log records the closed session

A token replayed from another address, or a second stop, gets no
administrator token back.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.core.container import get_db_session, get_password_service
from src.domain.enums import UserRole
from src.infrastructure.persistence.repositories import UserRepository
from src.main import app
from tests.utils.factories import create_test_user

PASSWORD = "s3cret-pass"


@pytest_asyncio.fixture
async def api(test_database):
    async def _session():
        async with test_database.get_session() as session:
            yield session

    app.dependency_overrides[get_db_session] = _session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def accounts(test_database):
    password_hash = get_password_service().hash_password(PASSWORD)
    admin = create_test_user(
        email="ada@example.com",
        password_hash=password_hash,
        first_name="Ada",
        last_name="Admin",
        role=UserRole.SYSTEM_ADMIN,
    )
    user = create_test_user(
        email="linus@example.com",
        password_hash=password_hash,
        first_name="Linus",
        last_name="User",
    )
    async with test_database.get_session() as session:
        repo = UserRepository(session=session)
        await repo.save(admin)
        await repo.save(user)
    return admin, user


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def _sign_in(api: AsyncClient, email: str) -> str:
    response = await api.post(
        "/api/v1/sessions", json={"email": email, "password": PASSWORD}
    )
    assert response.status_code == 201
    return response.json()["access_token"]


@pytest.mark.integration
class TestImpersonationFlow:
    """Start, use and stop an impersonation session."""

    async def test_full_session(self, api, accounts):
        admin, user = accounts
        admin_token = await _sign_in(api, "ADA@example.com")

        # Start
        response = await api.post(
            "/api/v1/admin/impersonations",
            json={"user_id": str(user.id), "reason": "Support ticket 42"},
            headers=_bearer(admin_token),
        )
        assert response.status_code == 201
        started = response.json()
        impersonation_token = started["access_token"]
        assert started["impersonated_user"]["id"] == str(user.id)
        assert started["audit_log"]["is_active"] is True

        # Act as the user
        response = await api.get(
            "/api/v1/sessions/current", headers=_bearer(impersonation_token)
        )
        assert response.status_code == 200
        current = response.json()
        assert current["user"]["id"] == str(user.id)
        assert current["impersonator"]["id"] == str(admin.id)

        # Policies still run against the administrator
        response = await api.get(
            f"/api/v1/users/{admin.id}", headers=_bearer(impersonation_token)
        )
        assert response.status_code == 200

        # Stop
        response = await api.delete(
            "/api/v1/admin/impersonations/current",
            headers=_bearer(impersonation_token),
        )
        assert response.status_code == 200
        stopped = response.json()
        assert stopped["impersonator"]["id"] == str(admin.id)
        assert stopped["audit_log"]["end_reason"] == "manual"

        # The old token no longer works
        response = await api.get(
            "/api/v1/sessions/current", headers=_bearer(impersonation_token)
        )
        assert response.status_code == 401

        # The fresh administrator token does
        response = await api.get(
            "/api/v1/admin/impersonations", headers=_bearer(stopped["access_token"])
        )
        assert response.status_code == 200
        logs = response.json()["logs"]
        assert len(logs) == 1
        assert logs[0]["is_active"] is False
        assert logs[0]["reason"] == "Support ticket 42"

    async def test_regular_user_cannot_impersonate(self, api, accounts):
        admin, _ = accounts
        user_token = await _sign_in(api, "linus@example.com")

        response = await api.post(
            "/api/v1/admin/impersonations",
            json={"user_id": str(admin.id)},
            headers=_bearer(user_token),
        )

        assert response.status_code == 403

    async def test_stop_without_impersonation(self, api, accounts):
        admin_token = await _sign_in(api, "ada@example.com")

        response = await api.delete(
            "/api/v1/admin/impersonations/current", headers=_bearer(admin_token)
        )

        assert response.status_code == 400

    async def test_token_used_from_another_address(self, api, accounts):
        _, user = accounts
        admin_token = await _sign_in(api, "ada@example.com")
        response = await api.post(
            "/api/v1/admin/impersonations",
            json={"user_id": str(user.id)},
            headers=_bearer(admin_token),
        )
        impersonation_token = response.json()["access_token"]

        # Replayed from a different client address
        transport = ASGITransport(app=app, client=("203.0.113.9", 123))
        async with AsyncClient(transport=transport, base_url="http://test") as other:
            response = await other.get(
                "/api/v1/sessions/current", headers=_bearer(impersonation_token)
            )
            assert response.status_code == 401

            response = await other.delete(
                "/api/v1/admin/impersonations/current",
                headers=_bearer(impersonation_token),
            )
            assert response.status_code == 401
            assert "access_token" not in response.json()

        # The session is closed for the original address too
        for _ in range(2):
            response = await api.delete(
                "/api/v1/admin/impersonations/current",
                headers=_bearer(impersonation_token),
            )
            assert response.status_code == 401
            assert "access_token" not in response.json()

        response = await api.get(
            "/api/v1/admin/impersonations", headers=_bearer(admin_token)
        )
        logs = response.json()["logs"]
        assert len(logs) == 1
        assert logs[0]["end_reason"] == "ip_change"

    async def test_second_stop_is_rejected(self, api, accounts):
        _, user = accounts
        admin_token = await _sign_in(api, "ada@example.com")
        response = await api.post(
            "/api/v1/admin/impersonations",
            json={"user_id": str(user.id)},
            headers=_bearer(admin_token),
        )
        impersonation_token = response.json()["access_token"]

        first = await api.delete(
            "/api/v1/admin/impersonations/current",
            headers=_bearer(impersonation_token),
        )
        second = await api.delete(
            "/api/v1/admin/impersonations/current",
            headers=_bearer(impersonation_token),
        )

        assert first.status_code == 200
        assert second.status_code == 401
        assert "access_token" not in second.json()
