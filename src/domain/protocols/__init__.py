"""Domain protocols (ports).

Structural interfaces implemented by the infrastructure layer.
"""

from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.impersonation_audit_log_repository import (
    ImpersonationAuditLogRepository,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol
from src.domain.protocols.user_repository import UserRepository

__all__ = [
    "EventBusProtocol",
    "EventHandler",
    "ImpersonationAuditLogRepository",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "TokenGenerationProtocol",
    "UserRepository",
]
