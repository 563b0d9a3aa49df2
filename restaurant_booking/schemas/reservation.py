"""
Pydantic schemas for reservations
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, time

from restaurant_booking.models.reservation import Reservation, ReservationStatus


class ReservationCreate(BaseModel):
    """Reservation request schema"""
    user_id: int
    table_id: int
    reservation_date: date
    reservation_time: time
    guests: int = Field(..., ge=1)
    special_requests: Optional[str] = Field(default=None, max_length=1000)


class ReservationView(BaseModel):
    """Reservation projection returned by every query and command"""
    id: int
    user_id: int
    user_name: str
    user_phone: Optional[str] = None
    table_id: int
    table_number: int
    reservation_date: date
    reservation_time: time
    guests: int
    status: ReservationStatus
    special_requests: Optional[str] = None

    @classmethod
    def from_reservation(cls, reservation: Reservation) -> "ReservationView":
        return cls(
            id=reservation.id,
            user_id=reservation.user_id,
            user_name=reservation.user.full_name,
            user_phone=reservation.user.phone,
            table_id=reservation.table_id,
            table_number=reservation.table.table_number,
            reservation_date=reservation.reservation_date,
            reservation_time=reservation.reservation_time,
            guests=reservation.guests,
            status=reservation.status,
            special_requests=reservation.special_requests,
        )
