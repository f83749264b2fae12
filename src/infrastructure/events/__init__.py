"""Infrastructure event implementations.

Event Bus:
    - InMemoryEventBus: Event bus with fail-open behavior

Event Handlers:
    - LoggingEventHandler: Structured logging for all domain events
"""

from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = [
    "InMemoryEventBus",
]
