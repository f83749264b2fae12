"""Record-level authorization policies.

Policies are pure predicates over an actor (User or None) and a record.
authorize() wraps them in a Result and policy_scope() resolves which
records an actor may list.

Usage:
    from src.domain.policies import UserPolicy, authorize, policy_scope

    if isinstance(authorize(actor, target, "show"), Failure):
        ...
    scope = policy_scope(actor, UserPolicy)
"""

from src.domain.policies.application_policy import ApplicationPolicy
from src.domain.policies.authorize import (
    POLICY_REGISTRY,
    authorize,
    policy_class_for,
    policy_for,
    policy_scope,
)
from src.domain.policies.impersonation_policy import ImpersonationPolicy
from src.domain.policies.scope import ScopeFilter, ScopeKind
from src.domain.policies.user_policy import UserPolicy

__all__ = [
    "ApplicationPolicy",
    "ImpersonationPolicy",
    "POLICY_REGISTRY",
    "ScopeFilter",
    "ScopeKind",
    "UserPolicy",
    "authorize",
    "policy_class_for",
    "policy_for",
    "policy_scope",
]
