"""Domain enums for business logic.

This package contains enumerations used throughout the domain layer.
Enums are centralized here for discoverability and maintainability.

Available Enums:
    - UserRole: Authorization roles (default, system_admin)
    - UserSort: User listing sort orders
    - ImpersonationAction: Audit log actions (start, end, timeout, forced_end)
    - ImpersonationEndReason: Reasons recorded when a session ends
"""

from src.domain.enums.impersonation_action import (
    ImpersonationAction,
    ImpersonationEndReason,
)
from src.domain.enums.user_role import UserRole
from src.domain.enums.user_sort import UserSort

__all__ = [
    "ImpersonationAction",
    "ImpersonationEndReason",
    "UserRole",
    "UserSort",
]
