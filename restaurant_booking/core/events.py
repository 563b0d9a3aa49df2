"""
Domain events system

Reservation lifecycle events are published after the unit of work commits so
that the notification dispatcher (or any other subscriber) only ever sees
state that is durable.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Callable, Dict, List, Optional
import uuid
import structlog

logger = structlog.get_logger(__name__)


class DomainEvent:
    """Base class for domain events"""

    def __init__(self, event_id: uuid.UUID = None):
        self.event_id = event_id or uuid.uuid4()
        self.occurred_at = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary"""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "event_type": self.__class__.__name__
        }


class ReservationEvent(DomainEvent):
    """Reservation snapshot with everything needed to notify the guest"""

    def __init__(
        self,
        reservation_id: int,
        user_id: int,
        user_name: str,
        user_email: Optional[str],
        user_phone: Optional[str],
        table_number: int,
        reservation_date: date,
        reservation_time: time,
        guests: int,
        status: str,
        event_id: uuid.UUID = None
    ):
        super().__init__(event_id)
        self.reservation_id = reservation_id
        self.user_id = user_id
        self.user_name = user_name
        self.user_email = user_email
        self.user_phone = user_phone
        self.table_number = table_number
        self.reservation_date = reservation_date
        self.reservation_time = reservation_time
        self.guests = guests
        self.status = status

    @classmethod
    def from_reservation(cls, reservation, **extra):
        """Build the event from a loaded Reservation with user and table"""
        return cls(
            reservation_id=reservation.id,
            user_id=reservation.user_id,
            user_name=reservation.user.full_name,
            user_email=reservation.user.email,
            user_phone=reservation.user.phone,
            table_number=reservation.table.table_number,
            reservation_date=reservation.reservation_date,
            reservation_time=reservation.reservation_time,
            guests=reservation.guests,
            status=str(reservation.status.value),
            **extra
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "reservation_id": self.reservation_id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "user_email": self.user_email,
            "user_phone": self.user_phone,
            "table_number": self.table_number,
            "reservation_date": self.reservation_date.isoformat(),
            "reservation_time": self.reservation_time.strftime("%H:%M"),
            "guests": self.guests,
            "status": self.status
        })
        return data


class ReservationCreated(ReservationEvent):
    """Event fired when a reservation is created in PENDING status"""


class ReservationStatusChanged(ReservationEvent):
    """Event fired when a reservation moves to a new status"""

    def __init__(self, *args, previous_status: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.previous_status = previous_status

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["previous_status"] = self.previous_status
        return data


class ReservationDeleted(ReservationEvent):
    """Event fired when an administrator deletes a reservation"""


class EventBus:
    """Simple in-memory event bus for publishing domain events"""

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: str, handler: Callable):
        """Subscribe to a specific event type"""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)
        logger.debug(f"Subscribed handler to event type: {event_type}")

    def unsubscribe(self, event_type: str, handler: Callable):
        """Unsubscribe from an event type"""
        if event_type in self._subscribers:
            self._subscribers[event_type].remove(handler)
            logger.debug(f"Unsubscribed handler from event type: {event_type}")

    def publish(self, event: DomainEvent):
        """Publish an event to all subscribers"""
        event_type = event.__class__.__name__
        handlers = self._subscribers.get(event_type, [])

        if not handlers:
            logger.debug(f"No subscribers for event type: {event_type}")
            return

        logger.info(f"Publishing event {event_type}: {event.event_id}")

        # Delivery is fire-and-forget; a failing subscriber never undoes a commit
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event_type}: {e}", exc_info=True)

    def clear_subscribers(self):
        """Clear all subscribers (useful for testing)"""
        self._subscribers.clear()
        logger.debug("Cleared all event subscribers")


# Global event bus instance
event_bus = EventBus()
