"""
Availability checker

A slot is the exact (table, date, time) triple. No seating duration is
modelled: 19:00 and 19:30 on the same table never conflict.
"""

from datetime import date, time

from restaurant_booking.services.reservation_ledger import ReservationLedger


class AvailabilityChecker:
    """Answers whether an active reservation already holds a slot"""

    def __init__(self, ledger: ReservationLedger):
        self.ledger = ledger

    def has_conflict(self, table_id: int, on: date, at: time) -> bool:
        return len(self.ledger.find_active_for_slot(table_id, on, at)) > 0

    def is_available(self, table_id: int, on: date, at: time) -> bool:
        return not self.has_conflict(table_id, on, at)
