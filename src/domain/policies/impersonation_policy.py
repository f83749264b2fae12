"""Impersonation authorization policy.

Only system administrators may impersonate, and only non-administrators
other than themselves. Stopping a session and reading the audit trail are
admin-only as well.

Invariants:
    - An actor can never impersonate itself.
    - An actor can never impersonate another administrator.
"""

from typing import Any, ClassVar

from src.domain.entities.user import User
from src.domain.policies.application_policy import ApplicationPolicy


class ImpersonationPolicy(ApplicationPolicy):
    """Policy for impersonation sessions and their audit logs.

    The record is the user to impersonate for ``start`` and is ignored by
    the other queries.
    """

    queries: ClassVar[frozenset[str]] = frozenset(
        {"start", "stop", "index", "view_audit_logs", "admin_access"}
    )

    def start(self) -> bool:
        if not self.admin():
            return False
        target = self.record
        if not isinstance(target, User):
            return False
        if target == self.user:
            return False
        return not target.system_admin

    def stop(self) -> bool:
        return self.admin()

    def index(self) -> bool:
        return self.admin()

    def view_audit_logs(self) -> bool:
        return self.admin()


def can_start(actor: User | None, target: Any) -> bool:
    """True iff actor is an admin and target is another, non-admin user."""
    return ImpersonationPolicy(actor, target).start()


def can_stop(actor: User | None) -> bool:
    return ImpersonationPolicy(actor, None).stop()


def can_index(actor: User | None) -> bool:
    return ImpersonationPolicy(actor, None).index()


def can_view_audit_logs(actor: User | None) -> bool:
    return ImpersonationPolicy(actor, None).view_audit_logs()
