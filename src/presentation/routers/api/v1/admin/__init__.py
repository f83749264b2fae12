"""Admin API handlers.

Handler functions for administrator-only endpoints.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    list_impersonations          - Impersonation audit logs
    create_impersonation         - Start impersonating a user
    delete_current_impersonation - Stop impersonating
"""

from src.presentation.routers.api.v1.admin.impersonations import (
    create_impersonation,
    delete_current_impersonation,
    list_impersonations,
)

__all__ = [
    "create_impersonation",
    "delete_current_impersonation",
    "list_impersonations",
]
