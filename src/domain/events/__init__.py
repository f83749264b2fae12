"""Domain events module.

Usage:
    >>> from src.domain.events import ImpersonationStartSucceeded
    >>>
    >>> await event_bus.publish(ImpersonationStartSucceeded(
    ...     impersonator_id=admin.id,
    ...     target_user_id=user.id,
    ...     audit_log_id=log.id,
    ... ))
"""

from src.domain.events.base_event import DomainEvent
from src.domain.events.impersonation_events import (
    ImpersonationSessionEnded,
    ImpersonationStartAttempted,
    ImpersonationStartFailed,
    ImpersonationStartSucceeded,
    ImpersonationStopAttempted,
    ImpersonationStopFailed,
    ImpersonationStopSucceeded,
)
from src.domain.events.user_events import (
    AdminRoleDemotionAttempted,
    AdminRoleDemotionFailed,
    AdminRoleDemotionSucceeded,
    AdminRolePromotionAttempted,
    AdminRolePromotionFailed,
    AdminRolePromotionSucceeded,
    UserCreated,
    UserDeactivated,
    UserLoginAttempted,
    UserLoginFailed,
    UserLoginSucceeded,
    UserUpdated,
)

__all__ = [
    "DomainEvent",
    # Impersonation
    "ImpersonationStartAttempted",
    "ImpersonationStartSucceeded",
    "ImpersonationStartFailed",
    "ImpersonationStopAttempted",
    "ImpersonationStopSucceeded",
    "ImpersonationStopFailed",
    "ImpersonationSessionEnded",
    # Users
    "UserLoginAttempted",
    "UserLoginSucceeded",
    "UserLoginFailed",
    "AdminRolePromotionAttempted",
    "AdminRolePromotionSucceeded",
    "AdminRolePromotionFailed",
    "AdminRoleDemotionAttempted",
    "AdminRoleDemotionSucceeded",
    "AdminRoleDemotionFailed",
    "UserCreated",
    "UserUpdated",
    "UserDeactivated",
]
