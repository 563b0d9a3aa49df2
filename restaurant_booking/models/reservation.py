"""
Reservation model with slot uniqueness for active bookings
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import DateTime, Index, text
from datetime import date, datetime, time
from typing import Optional, TYPE_CHECKING
from enum import Enum

from restaurant_booking.models.base import utc_now
from restaurant_booking.models.table import TableStatus

if TYPE_CHECKING:
    from restaurant_booking.models.table import Table
    from restaurant_booking.models.user import User


class ReservationStatus(str, Enum):
    """Status of a reservation"""
    PENDING = "PENDING"         # Waiting for staff confirmation
    CONFIRMED = "CONFIRMED"     # Confirmed by staff, table held
    SEATED = "SEATED"           # Guests arrived and seated
    COMPLETED = "COMPLETED"     # Guests left
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"         # Guests never arrived


# Statuses that occupy a slot
ACTIVE_STATUSES = (
    ReservationStatus.PENDING,
    ReservationStatus.CONFIRMED,
    ReservationStatus.SEATED,
)

_ACTIVE_SLOT_PREDICATE = text("status IN ('PENDING', 'CONFIRMED', 'SEATED')")

# Table status written when a reservation moves into each status
TABLE_STATUS_FOR = {
    ReservationStatus.CONFIRMED: TableStatus.RESERVED,
    ReservationStatus.SEATED: TableStatus.OCCUPIED,
    ReservationStatus.CANCELLED: TableStatus.AVAILABLE,
    ReservationStatus.COMPLETED: TableStatus.AVAILABLE,
    ReservationStatus.NO_SHOW: TableStatus.AVAILABLE,
}


class Reservation(SQLModel, table=True):
    """A booking of one table for one date and time slot"""

    __tablename__ = "reservations"
    __table_args__ = (
        Index(
            "uq_reservation_active_slot",
            "table_id",
            "reservation_date",
            "reservation_time",
            unique=True,
            sqlite_where=_ACTIVE_SLOT_PREDICATE,
            postgresql_where=_ACTIVE_SLOT_PREDICATE,
        ),
        Index("idx_reservation_date_time", "reservation_date", "reservation_time"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    table_id: int = Field(foreign_key="restaurant_tables.id", index=True, nullable=False)

    # Slot
    reservation_date: date = Field(nullable=False)
    reservation_time: time = Field(nullable=False)

    guests: int = Field(nullable=False, description="Number of guests, at least 1")
    status: ReservationStatus = Field(
        default=ReservationStatus.PENDING,
        index=True,
        nullable=False,
    )
    special_requests: Optional[str] = Field(default=None, max_length=1000, nullable=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    user: Optional["User"] = Relationship(back_populates="reservations")
    table: Optional["Table"] = Relationship(back_populates="reservations")

    def is_active(self) -> bool:
        """Check if the reservation still occupies its slot"""
        return self.status in ACTIVE_STATUSES
