"""JWT token service (adapter).

Implements TokenGenerationProtocol using PyJWT with HMAC-SHA256.

Security:
    - HMAC-SHA256 (HS256) algorithm
    - 256-bit secret key minimum
    - Separate lifetimes for regular and impersonation tokens
    - Unique JWT ID (jti) for tracking

Impersonation:
    An impersonation token is issued to the impersonated user (``sub``) and
    carries ImpersonationClaims (impersonator_id, audit_log_id,
    impersonation_ip, impersonation_started_at). Validation here only checks
    signature and expiry; the session itself is checked against its audit
    log on every request.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidSignatureError,
    InvalidTokenError,
)
from uuid_extensions import uuid7

from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError
from src.domain.value_objects import ImpersonationClaims


class JWTService:
    """JWT token generation and validation service.

    Usage:
        token_service: TokenGenerationProtocol = get_token_service()

        token = token_service.generate_access_token(
            user_id=user.id,
            email=user.email,
            roles=[user.role.value],
        )

        result = token_service.validate_access_token(token)
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 30,
        impersonation_expiration_minutes: int = 240,
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC-SHA256 signing (at least 32 bytes).
            expiration_minutes: Regular token lifetime.
            impersonation_expiration_minutes: Impersonation token lifetime.

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._impersonation_expiration_minutes = impersonation_expiration_minutes
        self._algorithm = "HS256"

    @property
    def expires_in(self) -> int:
        """Regular token lifetime in seconds."""
        return self._expiration_minutes * 60

    @property
    def impersonation_expires_in(self) -> int:
        """Impersonation token lifetime in seconds."""
        return self._impersonation_expiration_minutes * 60

    def generate_access_token(
        self,
        user_id: UUID,
        email: str,
        roles: list[str],
        impersonation: ImpersonationClaims | None = None,
    ) -> str:
        """Generate JWT access token.

        Args:
            user_id: Token subject.
            email: Subject's email address.
            roles: Subject's roles.
            impersonation: Impersonation claims, if this is an impersonation token.

        Returns:
            JWT access token string.

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> token = service.generate_access_token(
            ...     user_id=uuid7(),
            ...     email="user@example.com",
            ...     roles=["default"],
            ... )
            >>> len(token.split("."))
            3
        """
        now = datetime.now(UTC)
        lifetime = (
            self._impersonation_expiration_minutes
            if impersonation is not None
            else self._expiration_minutes
        )
        expires_at = now + timedelta(minutes=lifetime)

        payload: dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "roles": roles,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }

        if impersonation is not None:
            payload.update(impersonation.to_claims())

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate JWT access token and extract payload.

        Args:
            token: JWT access token string to validate.

        Returns:
            Success(payload): Valid signature, not expired, has a subject.
            Failure(error): EXPIRED_TOKEN, MALFORMED_TOKEN or INVALID_TOKEN.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except ExpiredSignatureError:
            return Failure(error=AuthenticationError.EXPIRED_TOKEN)
        except InvalidSignatureError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)
        except DecodeError:
            return Failure(error=AuthenticationError.MALFORMED_TOKEN)
        except InvalidTokenError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        return Success(value=payload)
