"""Unit tests for BcryptPasswordService and JWTService.

Tests cover:
- Password hashing and verification
- Cost factor bounds
- Access token generation (claims, jti, lifetimes)
- Impersonation token claims
- Token validation failures (expired, malformed, wrong key)
"""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from src.core.result import Failure, Success
from src.domain.errors import AuthenticationError
from src.domain.value_objects import ImpersonationClaims
from src.infrastructure.security import BcryptPasswordService, JWTService

SECRET = "unit-test-secret-key-0123456789abcdef"


@pytest.mark.unit
class TestBcryptPasswordService:
    """Test bcrypt hashing."""

    def test_hash_and_verify(self):
        service = BcryptPasswordService(cost_factor=4)

        password_hash = service.hash_password("s3cret-pass")

        assert password_hash.startswith("$2b$04$")
        assert service.verify_password("s3cret-pass", password_hash) is True
        assert service.verify_password("wrong-pass", password_hash) is False

    def test_hashes_are_salted(self):
        service = BcryptPasswordService(cost_factor=4)

        assert service.hash_password("same") != service.hash_password("same")

    def test_garbage_hash_does_not_verify(self):
        service = BcryptPasswordService(cost_factor=4)

        assert service.verify_password("s3cret-pass", "not-a-bcrypt-hash") is False

    @pytest.mark.parametrize("cost", [3, 21])
    def test_cost_factor_bounds(self, cost):
        with pytest.raises(ValueError):
            BcryptPasswordService(cost_factor=cost)


@pytest.mark.unit
class TestJWTServiceGeneration:
    """Test access token generation."""

    def test_short_secret_is_rejected(self):
        with pytest.raises(ValueError, match="at least 32 bytes"):
            JWTService(secret_key="short")

    def test_regular_token_claims(self):
        service = JWTService(secret_key=SECRET, expiration_minutes=30)
        user_id = uuid7()

        token = service.generate_access_token(
            user_id=user_id, email="ada@example.com", roles=["default"]
        )
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert payload["sub"] == str(user_id)
        assert payload["email"] == "ada@example.com"
        assert payload["roles"] == ["default"]
        assert payload["exp"] - payload["iat"] == 30 * 60
        assert payload["jti"]
        assert "impersonator_id" not in payload

    def test_each_token_has_unique_jti(self):
        service = JWTService(secret_key=SECRET)
        user_id = uuid7()

        first = jwt.decode(
            service.generate_access_token(user_id, "a@example.com", []),
            SECRET,
            algorithms=["HS256"],
        )
        second = jwt.decode(
            service.generate_access_token(user_id, "a@example.com", []),
            SECRET,
            algorithms=["HS256"],
        )

        assert first["jti"] != second["jti"]

    def test_impersonation_token_carries_claims_and_lifetime(self):
        service = JWTService(
            secret_key=SECRET,
            expiration_minutes=30,
            impersonation_expiration_minutes=240,
        )
        claims = ImpersonationClaims(
            impersonator_id=uuid7(),
            audit_log_id=uuid7(),
            ip_address="203.0.113.7",
            started_at=datetime.now(UTC),
        )

        token = service.generate_access_token(
            user_id=uuid7(),
            email="user@example.com",
            roles=["default"],
            impersonation=claims,
        )
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert payload["impersonator_id"] == str(claims.impersonator_id)
        assert payload["audit_log_id"] == str(claims.audit_log_id)
        assert payload["impersonation_ip"] == "203.0.113.7"
        assert payload["exp"] - payload["iat"] == 240 * 60
        assert service.impersonation_expires_in == 240 * 60
        assert service.expires_in == 30 * 60


@pytest.mark.unit
class TestJWTServiceValidation:
    """Test access token validation."""

    def test_valid_token(self):
        service = JWTService(secret_key=SECRET)
        token = service.generate_access_token(uuid7(), "a@example.com", ["default"])

        result = service.validate_access_token(token)

        assert isinstance(result, Success)
        assert result.value["email"] == "a@example.com"

    def test_expired_token(self):
        service = JWTService(secret_key=SECRET, expiration_minutes=1)
        with freeze_time(datetime.now(UTC) - timedelta(minutes=5)):
            token = service.generate_access_token(uuid7(), "a@example.com", [])

        result = service.validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error == AuthenticationError.EXPIRED_TOKEN

    def test_malformed_token(self):
        result = JWTService(secret_key=SECRET).validate_access_token("not.a.jwt")

        assert isinstance(result, Failure)
        assert result.error == AuthenticationError.MALFORMED_TOKEN

    def test_token_signed_with_other_key(self):
        other = JWTService(secret_key="another-secret-key-0123456789abcdef")
        token = other.generate_access_token(uuid7(), "a@example.com", [])

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error == AuthenticationError.INVALID_TOKEN

    def test_token_without_subject(self):
        token = jwt.encode(
            {"exp": int((datetime.now(UTC) + timedelta(minutes=5)).timestamp())},
            SECRET,
            algorithm="HS256",
        )

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error == AuthenticationError.INVALID_TOKEN
