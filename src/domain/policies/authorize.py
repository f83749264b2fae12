"""Policy lookup and authorization checks.

Turns a boolean policy query into a Result so handlers can stay on the
railway: a granted query returns the record, a denied one returns an
AuthorizationError naming the policy and query that failed.

Usage:
    from src.domain.policies import authorize

    result = authorize(actor, target_user, "destroy")
    match result:
        case Success(value=user):
            ...
        case Failure(error=error):
            # error.required_permission == "UserPolicy.destroy"
            ...
"""

from typing import Any, TypeVar

from src.core.enums import ErrorCode
from src.core.errors import AuthorizationError
from src.core.result import Failure, Result, Success
from src.domain.entities.impersonation_audit_log import ImpersonationAuditLog
from src.domain.entities.user import User
from src.domain.policies.application_policy import ApplicationPolicy
from src.domain.policies.impersonation_policy import ImpersonationPolicy
from src.domain.policies.scope import ScopeFilter
from src.domain.policies.user_policy import UserPolicy

R = TypeVar("R")

POLICY_REGISTRY: dict[type, type[ApplicationPolicy]] = {
    User: UserPolicy,
    ImpersonationAuditLog: ImpersonationPolicy,
}
"""Record class to policy class. Unlisted classes use ApplicationPolicy."""


def policy_class_for(record: Any) -> type[ApplicationPolicy]:
    """Resolve the policy class for a record or record class."""
    record_class = record if isinstance(record, type) else type(record)
    for cls in record_class.__mro__:
        policy_class = POLICY_REGISTRY.get(cls)
        if policy_class is not None:
            return policy_class
    return ApplicationPolicy


def policy_for(
    actor: User | None,
    record: Any,
    policy_class: type[ApplicationPolicy] | None = None,
) -> ApplicationPolicy:
    """Instantiate the policy governing ``record`` for ``actor``.

    Args:
        actor: Acting user (the impersonator while impersonating) or None.
        record: Record instance, record class, or None.
        policy_class: Explicit policy, bypassing the registry.

    Returns:
        ApplicationPolicy: Policy instance bound to actor and record.
    """
    cls = policy_class or policy_class_for(record)
    return cls(actor, record)


def authorize(
    actor: User | None,
    record: R,
    query: str,
    policy_class: type[ApplicationPolicy] | None = None,
) -> Result[R, AuthorizationError]:
    """Evaluate a policy query.

    Unknown queries are denied.

    Args:
        actor: Acting user or None for anonymous requests.
        record: Record instance or class the query is about.
        query: Predicate name, e.g. "show" or "start".
        policy_class: Explicit policy, bypassing the registry.

    Returns:
        Success(record): Query granted.
        Failure(AuthorizationError): Query denied or unknown.
    """
    policy = policy_for(actor, record, policy_class)
    policy_name = type(policy).__name__

    granted = False
    if query in policy.queries:
        predicate = getattr(policy, query, None)
        granted = callable(predicate) and predicate() is True

    if granted:
        return Success(value=record)

    return Failure(
        error=AuthorizationError(
            code=ErrorCode.PERMISSION_DENIED,
            message="You are not authorized to perform this action.",
            required_permission=f"{policy_name}.{query}",
        )
    )


def policy_scope(
    actor: User | None,
    policy_class: type[ApplicationPolicy] = ApplicationPolicy,
) -> ScopeFilter:
    """Resolve the scope of records ``actor`` may enumerate.

    Args:
        actor: Acting user or None.
        policy_class: Policy whose Scope to use.

    Returns:
        ScopeFilter: Filter for repositories or in-memory collections.
    """
    return policy_class.Scope(actor).resolve()
