"""
Booking error taxonomy

Every failure the reservation core reports is a BookingError subclass with a
stable machine-readable code and the HTTP status the API layer maps it to.
"""

from fastapi import status


class BookingError(Exception):
    """Base class for reservation and table errors"""

    code = "booking_error"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class NotFound(BookingError):
    """Referenced user, table or reservation does not exist"""

    code = "not_found"
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} not found with ID: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class PastDate(BookingError):
    """Reservation date precedes the current date"""

    code = "past_date"


class CapacityExceeded(BookingError):
    """Guest count exceeds the table's capacity"""

    code = "capacity_exceeded"

    def __init__(self, capacity: int, guests: int):
        super().__init__(
            f"Table does not have enough capacity. Capacity: {capacity}, requested: {guests}"
        )
        self.capacity = capacity
        self.guests = guests


class SlotConflict(BookingError):
    """An active reservation already holds the slot"""

    code = "slot_conflict"
    http_status = status.HTTP_409_CONFLICT


class DuplicateTableNumber(BookingError):
    code = "duplicate_table_number"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, table_number: int):
        super().__init__(f"A table with number {table_number} already exists")
        self.table_number = table_number


class TableInUse(BookingError):
    """Table still referenced by reservations and cannot be removed"""

    code = "table_in_use"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, table_number: int):
        super().__init__(f"Table {table_number} has reservations and cannot be deleted")
        self.table_number = table_number


class InvalidInput(BookingError):
    code = "invalid_input"


class Forbidden(BookingError):
    code = "forbidden"
    http_status = status.HTTP_403_FORBIDDEN
