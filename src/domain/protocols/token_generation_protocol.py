"""Token generation protocol for domain layer.

This protocol defines the interface for JWT access token generation and validation.
Infrastructure layer provides concrete implementations.

Token Strategy:
    - Access tokens: Short-lived JWT
    - Impersonation tokens: Access tokens for the impersonated user carrying
      ImpersonationClaims, with their own lifetime
    - Stateless validation (no database lookup)
"""

from typing import Any, Protocol
from uuid import UUID

from src.core.result import Result
from src.domain.value_objects.impersonation_claims import ImpersonationClaims


class TokenGenerationProtocol(Protocol):
    """JWT access token generation and validation interface.

    Usage:
        token = self.token_service.generate_access_token(
            user_id=user.id,
            email=user.email,
            roles=[user.role.value],
        )

        result = self.token_service.validate_access_token(token)
        match result:
            case Success(value=payload):
                user_id = UUID(payload["sub"])
            case Failure(error=error):
                # Invalid or expired token
                pass
    """

    def generate_access_token(
        self,
        user_id: UUID,
        email: str,
        roles: list[str],
        impersonation: ImpersonationClaims | None = None,
    ) -> str:
        """Generate JWT access token.

        Args:
            user_id: Subject of the token ('sub' claim).
            email: Subject's email address.
            roles: Subject's roles (e.g. ["default"], ["system_admin"]).
            impersonation: Claims marking an impersonation session. The
                token then uses the impersonation lifetime.

        Returns:
            JWT access token string (header.payload.signature).
        """
        ...

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate JWT access token and extract payload.

        Returns:
            Success(payload): Signature and expiration are valid.
            Failure(error): AuthenticationError constant.
        """
        ...
