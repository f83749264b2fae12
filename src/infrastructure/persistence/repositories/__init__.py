"""Repository implementations (adapters for hexagonal architecture).

This package contains concrete implementations of repository protocols
defined in the domain layer.
"""

from src.infrastructure.persistence.repositories.impersonation_audit_log_repository import (
    ImpersonationAuditLogRepository,
)
from src.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = [
    "ImpersonationAuditLogRepository",
    "UserRepository",
]
