from restaurant_booking.models.user import User, UserRole
from restaurant_booking.models.table import Table, TableLocation, TableStatus
from restaurant_booking.models.reservation import (
    Reservation,
    ReservationStatus,
    ACTIVE_STATUSES,
)
