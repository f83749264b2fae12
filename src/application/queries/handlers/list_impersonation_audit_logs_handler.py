"""ListImpersonationAuditLogs query handler.

Administrators only (ImpersonationPolicy.view_audit_logs). Logs are
returned newest first, one page at a time.
"""

from src.application.dtos import AuditLogListResult, AuditLogResult
from src.application.errors import ApplicationError
from src.application.queries.impersonation_queries import ListImpersonationAuditLogs
from src.application.services import PolicyEnforcer
from src.core.result import Failure, Result, Success
from src.domain.policies import ImpersonationPolicy
from src.domain.protocols import ImpersonationAuditLogRepository, UserRepository


class ListImpersonationAuditLogsHandler:
    """Handler for ListImpersonationAuditLogs query."""

    def __init__(
        self,
        user_repo: UserRepository,
        audit_log_repo: ImpersonationAuditLogRepository,
    ) -> None:
        self._audit_log_repo = audit_log_repo
        self._enforcer = PolicyEnforcer(user_repo)

    async def handle(
        self, query: ListImpersonationAuditLogs
    ) -> Result[AuditLogListResult, ApplicationError]:
        actor_result = await self._enforcer.load_actor(query.actor_id)
        if isinstance(actor_result, Failure):
            return actor_result

        allowed = self._enforcer.authorize(
            actor_result.value, None, "view_audit_logs", ImpersonationPolicy
        )
        if isinstance(allowed, Failure):
            return allowed

        page = max(query.page, 1)
        logs = await self._audit_log_repo.list_logs(
            active_only=query.active_only,
            limit=query.per_page,
            offset=(page - 1) * query.per_page,
        )
        total = await self._audit_log_repo.count_logs(active_only=query.active_only)

        return Success(
            value=AuditLogListResult(
                logs=[AuditLogResult.from_entity(log) for log in logs],
                total_count=total,
                page=page,
                per_page=query.per_page,
            )
        )
