"""Application commands (CQRS write operations)."""

from src.application.commands.auth_commands import AuthenticateUser
from src.application.commands.impersonation_commands import (
    EndImpersonationSession,
    StartImpersonation,
    StopImpersonation,
)
from src.application.commands.user_commands import (
    CreateUser,
    DeleteUser,
    DemoteUserFromAdmin,
    PromoteUserToAdmin,
    UpdateUser,
)

__all__ = [
    "AuthenticateUser",
    "CreateUser",
    "DeleteUser",
    "DemoteUserFromAdmin",
    "EndImpersonationSession",
    "PromoteUserToAdmin",
    "StartImpersonation",
    "StopImpersonation",
    "UpdateUser",
]
