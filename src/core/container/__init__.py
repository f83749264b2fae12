"""Container module - Centralized dependency injection.

Re-exports every factory function from the submodules:

    from src.core.container import get_logger, get_start_impersonation_handler

The container is organized into modules:
- infrastructure: Core services (database, logging, security)
- events: Event bus and subscriptions
- repositories: Repository factories
- auth_handlers: Sign-in handler factory
- user_handlers: User management handler factories
- impersonation_handlers: Impersonation handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_logger,
    get_password_service,
    get_token_service,
)

# Event bus
from src.core.container.events import get_event_bus

# Repositories
from src.core.container.repositories import (
    get_impersonation_audit_log_repository,
    get_user_repository,
)

# Auth handlers
from src.core.container.auth_handlers import get_authenticate_user_handler

# User handlers
from src.core.container.user_handlers import (
    get_create_user_handler,
    get_delete_user_handler,
    get_demote_user_handler,
    get_get_user_handler,
    get_list_users_handler,
    get_promote_user_handler,
    get_update_user_handler,
)

# Impersonation handlers
from src.core.container.impersonation_handlers import (
    get_end_impersonation_session_handler,
    get_list_impersonation_audit_logs_handler,
    get_start_impersonation_handler,
    get_stop_impersonation_handler,
    get_validate_impersonation_session_handler,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_password_service",
    "get_token_service",
    "get_logger",
    # Events
    "get_event_bus",
    # Repositories
    "get_user_repository",
    "get_impersonation_audit_log_repository",
    # Auth handlers
    "get_authenticate_user_handler",
    # User handlers
    "get_list_users_handler",
    "get_get_user_handler",
    "get_create_user_handler",
    "get_update_user_handler",
    "get_delete_user_handler",
    "get_promote_user_handler",
    "get_demote_user_handler",
    # Impersonation handlers
    "get_start_impersonation_handler",
    "get_stop_impersonation_handler",
    "get_end_impersonation_session_handler",
    "get_validate_impersonation_session_handler",
    "get_list_impersonation_audit_logs_handler",
]
