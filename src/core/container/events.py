# mypy: disable-error-code="arg-type"
"""Event bus dependency factory.

Application-scoped singleton for domain event publishing. Subscriptions are
wired here at first use.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.protocols.event_bus_protocol import EventBusProtocol


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Subscriptions:
        - LoggingEventHandler.handle_info: every *Attempted and *Succeeded
          event plus user lifecycle events
        - LoggingEventHandler.handle_warning: every *Failed event
        - LoggingEventHandler.handle_session_ended: ImpersonationSessionEnded

    Returns:
        Event bus implementing EventBusProtocol.

    Usage:
        event_bus = get_event_bus()
        await event_bus.publish(ImpersonationStartSucceeded(...))
    """
    from src.core.container.infrastructure import get_logger
    from src.domain import events
    from src.infrastructure.events import InMemoryEventBus
    from src.infrastructure.events.handlers import LoggingEventHandler

    logger = get_logger()
    event_bus = InMemoryEventBus(logger=logger)
    logging_handler = LoggingEventHandler(logger=logger)

    info_events = (
        events.ImpersonationStartAttempted,
        events.ImpersonationStartSucceeded,
        events.ImpersonationStopAttempted,
        events.ImpersonationStopSucceeded,
        events.UserLoginAttempted,
        events.UserLoginSucceeded,
        events.AdminRolePromotionAttempted,
        events.AdminRolePromotionSucceeded,
        events.AdminRoleDemotionAttempted,
        events.AdminRoleDemotionSucceeded,
        events.UserCreated,
        events.UserUpdated,
        events.UserDeactivated,
    )
    warning_events = (
        events.ImpersonationStartFailed,
        events.ImpersonationStopFailed,
        events.UserLoginFailed,
        events.AdminRolePromotionFailed,
        events.AdminRoleDemotionFailed,
    )

    for event_type in info_events:
        event_bus.subscribe(event_type, logging_handler.handle_info)
    for event_type in warning_events:
        event_bus.subscribe(event_type, logging_handler.handle_warning)
    event_bus.subscribe(
        events.ImpersonationSessionEnded,
        logging_handler.handle_session_ended,  # type: ignore[arg-type]
    )

    return event_bus
