"""Validators package exports."""

from src.domain.validators.functions import (
    validate_email,
    validate_password,
    validate_role,
)

__all__ = [
    "validate_email",
    "validate_password",
    "validate_role",
]
