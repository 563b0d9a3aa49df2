from restaurant_booking.services.table_registry import TableRegistry
from restaurant_booking.services.reservation_ledger import ReservationLedger
from restaurant_booking.services.availability import AvailabilityChecker
from restaurant_booking.services.reservation_lifecycle import ReservationLifecycle
