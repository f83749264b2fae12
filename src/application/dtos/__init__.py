"""Application DTOs (handler results)."""

from src.application.dtos.impersonation_dtos import (
    AuditLogListResult,
    AuditLogResult,
    ImpersonationSession,
    ImpersonationStopped,
)
from src.application.dtos.user_dtos import (
    AccessTokenResult,
    UserListResult,
    UserResult,
)

__all__ = [
    "AccessTokenResult",
    "AuditLogListResult",
    "AuditLogResult",
    "ImpersonationSession",
    "ImpersonationStopped",
    "UserListResult",
    "UserResult",
]
