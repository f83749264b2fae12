"""Event bus protocol (port) for domain events.

The domain defines the port; infrastructure provides the adapter
(InMemoryEventBus). The container wires handlers at startup.

Usage:
    >>> event_bus = get_event_bus()
    >>> await event_bus.publish(ImpersonationStartSucceeded(...))
    >>>
    >>> async def handle(event: ImpersonationStartSucceeded) -> None:
    ...     ...
    >>> event_bus.subscribe(ImpersonationStartSucceeded, handle)
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from src.domain.events.base_event import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]
"""Async event handler. Handlers return None and must not raise into the bus."""


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Key Requirements:
        1. **Fail-open behavior**: One handler failure must NOT prevent other
           handlers from executing. Log errors but continue processing.
        2. **Async support**: All handlers are async.
        3. **Type-based routing**: Handlers registered for an event type only
           receive events of that exact type.
        4. **No ordering guarantees**: Handlers execute concurrently.
    """

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register event handler for specific event type.

        Args:
            event_type: Class of event to handle (exact type, no inheritance
                matching).
            handler: Async function called with the event.
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Publish event to all registered handlers.

        Never raises: handler exceptions are logged by the bus. Publishing an
        event without handlers is a no-op.

        Args:
            event: Domain event to publish.
        """
        ...
