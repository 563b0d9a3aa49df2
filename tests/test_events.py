"""
Unit tests for domain events and the notification relay
"""

from datetime import date, time

from restaurant_booking.core.events import (
    EventBus,
    ReservationCreated,
    ReservationDeleted,
    ReservationStatusChanged,
)
from restaurant_booking.services.notifications import NotificationRelay, register_notification_relay


def make_event(event_cls=ReservationCreated, **overrides):
    data = {
        "reservation_id": 1,
        "user_id": 3,
        "user_name": "Alice Test",
        "user_email": "alice@example.com",
        "user_phone": "600123456",
        "table_number": 5,
        "reservation_date": date(2030, 6, 15),
        "reservation_time": time(19, 0),
        "guests": 2,
        "status": "PENDING",
    }
    data.update(overrides)
    return event_cls(**data)


def test_event_payload():
    """Test the payload carries what a notification needs"""
    payload = make_event().to_dict()

    assert payload["event_type"] == "ReservationCreated"
    assert payload["user_email"] == "alice@example.com"
    assert payload["table_number"] == 5
    assert payload["reservation_date"] == "2030-06-15"
    assert payload["reservation_time"] == "19:00"
    assert "event_id" in payload
    assert "occurred_at" in payload


def test_status_changed_payload():
    event = make_event(ReservationStatusChanged, status="CONFIRMED", previous_status="PENDING")

    payload = event.to_dict()
    assert payload["status"] == "CONFIRMED"
    assert payload["previous_status"] == "PENDING"


def test_publish_to_subscribers():
    bus = EventBus()
    received = []
    bus.subscribe("ReservationCreated", received.append)

    event = make_event()
    bus.publish(event)
    bus.publish(make_event(ReservationDeleted))

    assert received == [event]


def test_failing_subscriber_does_not_break_publish():
    """Test one failing handler neither raises nor starves the others"""
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("mail server down")

    bus.subscribe("ReservationCreated", broken)
    bus.subscribe("ReservationCreated", received.append)

    bus.publish(make_event())

    assert len(received) == 1


def test_unsubscribe():
    bus = EventBus()
    received = []
    bus.subscribe("ReservationCreated", received.append)
    bus.unsubscribe("ReservationCreated", received.append)

    bus.publish(make_event())

    assert received == []


def test_relay_dispatches_lifecycle_events():
    bus = EventBus()
    dispatched = []
    register_notification_relay(bus, NotificationRelay(dispatch=dispatched.append))

    bus.publish(make_event())
    bus.publish(make_event(ReservationStatusChanged, status="SEATED", previous_status="CONFIRMED"))
    bus.publish(make_event(ReservationDeleted))

    assert [p["event_type"] for p in dispatched] == [
        "ReservationCreated",
        "ReservationStatusChanged",
        "ReservationDeleted",
    ]


def test_relay_skips_without_contact_details():
    dispatched = []
    relay = NotificationRelay(dispatch=dispatched.append)

    relay(make_event(user_email=None, user_phone=None))

    assert dispatched == []


def test_relay_without_dispatcher_logs_only():
    relay = NotificationRelay()
    relay(make_event())
