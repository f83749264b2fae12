"""Logging event handler for domain events.

Structured logging for every impersonation and user-management event.

Log Levels:
    - INFO: ATTEMPTED and SUCCEEDED events, lifecycle events
    - WARNING: FAILED events, sessions ended by timeout, IP change or
      invalid session

Structured Fields:
    - event name: snake_case class name (e.g. "impersonation_start_succeeded")
    - event_id: UUID for event correlation
    - occurred_at: ISO 8601 timestamp (UTC)
    - every event attribute, stringified (UUIDs, datetimes)

Usage:
    >>> handler = LoggingEventHandler(logger=get_logger())
    >>> event_bus.subscribe(ImpersonationStartSucceeded, handler.handle_info)
    >>> event_bus.subscribe(ImpersonationStartFailed, handler.handle_warning)
"""

import re
from dataclasses import fields
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from src.domain.enums.impersonation_action import ImpersonationEndReason
from src.domain.events.base_event import DomainEvent
from src.domain.events.impersonation_events import ImpersonationSessionEnded
from src.domain.protocols.logger_protocol import LoggerProtocol

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# End reasons an administrator did not ask for.
_ABNORMAL_END_REASONS = frozenset(
    {
        ImpersonationEndReason.TIMEOUT.value,
        ImpersonationEndReason.IP_CHANGE.value,
        ImpersonationEndReason.INVALID_SESSION.value,
    }
)


def log_event_name(event: DomainEvent) -> str:
    """snake_case event name, e.g. ``admin_role_promotion_failed``."""
    return _CAMEL_BOUNDARY.sub("_", event.event_name).lower()


def event_context(event: DomainEvent) -> dict[str, Any]:
    """Flatten an event into log-safe key/value context."""
    context: dict[str, Any] = {}
    for event_field in fields(event):
        value = getattr(event, event_field.name)
        if isinstance(value, UUID):
            value = str(value)
        elif isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, Enum):
            value = value.value
        elif isinstance(value, tuple):
            value = list(value)
        context[event_field.name] = value
    return context


class LoggingEventHandler:
    """Event handler for structured logging of domain events.

    Attributes:
        _logger: Logger protocol implementation (from container).
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def handle_info(self, event: DomainEvent) -> None:
        """Log a normal operation (INFO level)."""
        self._logger.info(log_event_name(event), **event_context(event))

    async def handle_warning(self, event: DomainEvent) -> None:
        """Log a failed operation (WARNING level)."""
        self._logger.warning(log_event_name(event), **event_context(event))

    async def handle_session_ended(self, event: ImpersonationSessionEnded) -> None:
        """Log a system-ended session.

        Timeouts, IP changes and invalid sessions are WARNING; a session
        replaced by a new one is INFO.
        """
        if event.end_reason in _ABNORMAL_END_REASONS:
            await self.handle_warning(event)
        else:
            await self.handle_info(event)
