"""Application queries (CQRS read operations)."""

from src.application.queries.impersonation_queries import (
    ListImpersonationAuditLogs,
    ValidateImpersonationSession,
)
from src.application.queries.user_queries import GetUser, ListUsers

__all__ = [
    "GetUser",
    "ListImpersonationAuditLogs",
    "ListUsers",
    "ValidateImpersonationSession",
]
