"""Database models for persistence layer.

Models Organization:
    - user.py: User model
    - impersonation_audit_log.py: Impersonation audit trail

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models live here and are mapped via the repository layer.
"""

from src.infrastructure.persistence.models.impersonation_audit_log import (
    ImpersonationAuditLog,
)
from src.infrastructure.persistence.models.user import User

__all__ = [
    "ImpersonationAuditLog",
    "User",
]
