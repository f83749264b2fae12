"""Base domain event class.

Domain events are immutable records of something that happened
(ImpersonationStartSucceeded, AdminRolePromotionFailed, ...). They are
named in past tense and published on the event bus by command handlers.

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    ... class UserLoginSucceeded(DomainEvent):
    ...     user_id: UUID
    >>>
    >>> event = UserLoginSucceeded(user_id=uuid7())
    >>> event.event_id  # Auto-generated UUID
    >>> event.occurred_at  # Auto-generated UTC timestamp
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming
        3. Be frozen dataclasses with kw_only=True

    Attributes:
        event_id: Unique identifier of this event instance.
        occurred_at: When the event occurred (UTC).
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def event_name(self) -> str:
        """Class name, used as the structured log event field."""
        return type(self).__name__
