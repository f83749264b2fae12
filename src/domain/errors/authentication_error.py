"""Authentication domain errors.

Defines authentication-specific error constants for token validation
and credential checks.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)

Usage:
    from src.domain.errors import AuthenticationError
    from src.core.result import Failure

    result = token_service.validate_access_token(token)
    match result:
        case Success(value=payload):
            # Process valid token
            ...
        case Failure(error=AuthenticationError.EXPIRED_TOKEN):
            # Handle expired token
            ...
"""


class AuthenticationError:
    """Authentication error constants.

    Used in Result types for authentication failures.
    These are NOT exceptions - they are error value constants
    used in railway-oriented programming pattern.

    Error Categories:
        - Token errors: INVALID_TOKEN, EXPIRED_TOKEN, MALFORMED_TOKEN
        - Credential errors: INVALID_CREDENTIALS, ACCOUNT_INACTIVE
    """

    # Token validation errors
    INVALID_TOKEN = "Invalid token"
    EXPIRED_TOKEN = "Token expired"
    MALFORMED_TOKEN = "Malformed token"

    # Credential validation errors
    INVALID_CREDENTIALS = "Invalid email or password"
    ACCOUNT_INACTIVE = "Account is not active"
    USER_NOT_FOUND = "Authenticated user no longer exists"
