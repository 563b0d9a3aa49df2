"""
Schemas module
"""

from restaurant_booking.schemas.reservation import ReservationCreate, ReservationView
from restaurant_booking.schemas.table import TableCreate, TableUpdate, TableView

__all__ = [
    "ReservationCreate",
    "ReservationView",
    "TableCreate",
    "TableUpdate",
    "TableView",
]
