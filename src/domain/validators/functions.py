"""Centralized validation functions (DRY principle).

All validation logic defined once, reused everywhere via Annotated types.
Validators are pure functions that raise ValueError on validation failure.
"""

from email_validator import EmailNotValidError
from email_validator import validate_email as _validate_email

from src.domain.enums.user_role import UserRole

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128


def validate_email(v: str) -> str:
    """Validate email format.

    Uses the email-validator library without a deliverability check.

    Args:
        v: Email address to validate.

    Returns:
        Normalized email (lowercase).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email("User@Example.COM")
        'user@example.com'
    """
    try:
        validated = _validate_email(v, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email format: {e}") from e
    return validated.normalized.lower()


def validate_password(v: str) -> str:
    """Validate password length.

    Args:
        v: Password to validate.

    Returns:
        Password unchanged (validation only).

    Raises:
        ValueError: If password is shorter than 6 or longer than 128 characters.
    """
    if len(v) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(v) > MAX_PASSWORD_LENGTH:
        raise ValueError(
            f"Password must be at most {MAX_PASSWORD_LENGTH} characters"
        )
    return v


def validate_role(v: str) -> str:
    """Validate a role name against UserRole.

    Raises:
        ValueError: If the role is unknown.
    """
    if not UserRole.is_valid(v):
        raise ValueError(f"Role must be one of: {', '.join(UserRole.values())}")
    return v
