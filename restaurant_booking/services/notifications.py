"""
Notification hand-off

Formatting and delivering emails or messages belongs to the notification
dispatcher. This module subscribes to reservation lifecycle events and hands
the payload on; without a dispatcher configured it records the payload in the
structured log.
"""

from typing import Callable, Dict, Optional
import structlog

from restaurant_booking.core.events import (
    EventBus,
    ReservationCreated,
    ReservationDeleted,
    ReservationEvent,
    ReservationStatusChanged,
)

logger = structlog.get_logger(__name__)

LIFECYCLE_EVENTS = (ReservationCreated, ReservationStatusChanged, ReservationDeleted)


class NotificationRelay:
    """Forwards lifecycle events to a dispatcher callable"""

    def __init__(self, dispatch: Optional[Callable[[Dict], None]] = None):
        self.dispatch = dispatch

    def __call__(self, event: ReservationEvent):
        payload = event.to_dict()
        if not payload.get("user_email") and not payload.get("user_phone"):
            logger.warning(f"No contact details for reservation {event.reservation_id}, notification skipped")
            return

        if self.dispatch is None:
            logger.info("Reservation notification", **payload)
            return

        self.dispatch(payload)


def register_notification_relay(bus: EventBus, relay: Optional[NotificationRelay] = None) -> NotificationRelay:
    """Subscribe a relay to every reservation lifecycle event"""
    relay = relay or NotificationRelay()
    for event_type in LIFECYCLE_EVENTS:
        bus.subscribe(event_type.__name__, relay)
    return relay
