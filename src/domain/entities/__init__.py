"""Domain entities for business logic.

Pure business logic entities with no framework dependencies.
"""

from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog
from src.domain.entities.user import User

__all__ = [
    "ImpersonationAuditLog",
    "User",
]
