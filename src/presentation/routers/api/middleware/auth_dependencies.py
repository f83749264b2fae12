"""JWT authentication dependencies.

FastAPI dependencies for extracting and validating JWT tokens, including
impersonation tokens.

An impersonation token is an access token for the impersonated user that
also names the administrator and the audit log. Every request made with one
is checked against the audit log (ValidateImpersonationSession); a failed
check ends the session and the request gets a 401.

Usage:
    # Protected route (requires auth)
    @router.get("/protected")
    async def protected_route(
        current_user: CurrentUser = Depends(get_current_user),
    ):
        return {"user_id": str(current_user.user_id)}

    # Policies run against the administrator while impersonating
    async def admin_route(
        actor_id: UUID = Depends(get_policy_actor_id),
    ): ...
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.application.queries.handlers.validate_impersonation_session_handler import (
    ValidateImpersonationSessionHandler,
)
from src.application.queries.impersonation_queries import ValidateImpersonationSession
from src.core.container import (
    get_token_service,
    get_user_repository,
    get_validate_impersonation_session_handler,
)
from src.core.result import Failure, Success
from src.domain.entities.user import User
from src.domain.errors import AuthenticationError
from src.domain.protocols import UserRepository
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol
from src.domain.value_objects import ImpersonationClaims

# HTTP Bearer token extractor
# A missing header is reported by get_token_user as 401
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated user information from JWT.

    Attributes:
        user_id: Token subject (the impersonated user while impersonating).
        email: Subject's email address.
        roles: Subject's roles.
        token_jti: JWT unique identifier.
        impersonation: Impersonation claims, None for ordinary tokens.
    """

    user_id: UUID
    email: str
    roles: list[str]
    token_jti: str | None = None
    impersonation: ImpersonationClaims | None = None

    @property
    def is_impersonating(self) -> bool:
        return self.impersonation is not None

    @property
    def impersonator_id(self) -> UUID | None:
        return self.impersonation.impersonator_id if self.impersonation else None

    @property
    def audit_log_id(self) -> UUID | None:
        return self.impersonation.audit_log_id if self.impersonation else None

    @property
    def policy_actor_id(self) -> UUID:
        """User the policies are evaluated against."""
        return self.impersonator_id or self.user_id


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    token_service: Annotated[TokenGenerationProtocol, Depends(get_token_service)],
) -> CurrentUser:
    """Decode the bearer token without checking the impersonation session.

    Used directly only by the stop-impersonation route, which must work even
    when the session it closes is no longer valid.

    Raises:
        HTTPException 401: If token is missing, invalid, or expired.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    result = token_service.validate_access_token(credentials.credentials)

    match result:
        case Success(value=payload):
            try:
                roles_raw = payload.get("roles", [])
                jti_raw = payload.get("jti")
                return CurrentUser(
                    user_id=UUID(str(payload["sub"])),
                    email=str(payload["email"]),
                    roles=roles_raw if isinstance(roles_raw, list) else [],
                    token_jti=str(jti_raw) if jti_raw else None,
                    impersonation=ImpersonationClaims.from_claims(payload),
                )
            except (KeyError, ValueError) as e:
                raise _unauthorized("Invalid token payload") from e

        case Failure(error=error):
            raise _unauthorized(error)

    raise _unauthorized(AuthenticationError.INVALID_TOKEN)


async def get_current_user(
    request: Request,
    token_user: Annotated[CurrentUser, Depends(get_token_user)],
    validator: Annotated[
        ValidateImpersonationSessionHandler,
        Depends(get_validate_impersonation_session_handler),
    ],
) -> CurrentUser:
    """Get current authenticated user, validating impersonation sessions.

    Args:
        request: Incoming request (for the client address).
        token_user: Decoded token.
        validator: ValidateImpersonationSession handler (injected).

    Returns:
        CurrentUser with user identity from valid JWT.

    Raises:
        HTTPException 401: Invalid token, or the impersonation session was
            ended (timeout, IP change, invalid session).
    """
    claims = token_user.impersonation
    if claims is None:
        return token_user

    result = await validator.handle(
        ValidateImpersonationSession(
            audit_log_id=claims.audit_log_id,
            impersonator_id=claims.impersonator_id,
            impersonated_user_id=token_user.user_id,
            started_at=claims.started_at,
            ip_address=claims.ip_address,
            request_ip=request.client.host if request.client else None,
        )
    )

    match result:
        case Success():
            return token_user
        case Failure(error=error):
            raise _unauthorized(error.message)

    raise _unauthorized(AuthenticationError.INVALID_TOKEN)


async def get_policy_actor_id(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UUID:
    """ID of the user the policies run against (the administrator while impersonating)."""
    return current_user.policy_actor_id


async def get_policy_actor(
    actor_id: Annotated[UUID, Depends(get_policy_actor_id)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
) -> User:
    """Load the policy actor.

    Raises:
        HTTPException 401: The actor no longer exists or was deactivated.
    """
    actor = await user_repo.find_by_id(actor_id)
    if actor is None or not actor.is_active:
        raise _unauthorized(AuthenticationError.USER_NOT_FOUND)
    return actor
