"""
Table model for restaurant seating
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import DateTime
from datetime import datetime
from typing import Optional, TYPE_CHECKING
from enum import Enum

from restaurant_booking.models.base import utc_now

if TYPE_CHECKING:
    from restaurant_booking.models.reservation import Reservation


class TableLocation(str, Enum):
    """Area of the restaurant a table sits in"""
    INDOOR = "INDOOR"
    OUTDOOR = "OUTDOOR"         # Terrace
    WINDOW = "WINDOW"
    VIP = "VIP"


class TableStatus(str, Enum):
    """Physical occupancy status of a table"""
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"       # Guests seated
    RESERVED = "RESERVED"       # Held by a confirmed reservation
    MAINTENANCE = "MAINTENANCE"


class Table(SQLModel, table=True):
    """Table model for restaurant seating"""

    __tablename__ = "restaurant_tables"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Table details
    table_number: int = Field(unique=True, index=True, nullable=False, description="Number shown to guests and staff")
    capacity: int = Field(nullable=False, description="Maximum number of guests")
    location: TableLocation = Field(default=TableLocation.INDOOR, nullable=False)
    description: Optional[str] = Field(default=None, max_length=500, nullable=True)

    # Status
    status: TableStatus = Field(default=TableStatus.AVAILABLE, index=True, nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    reservations: list["Reservation"] = Relationship(back_populates="table")

    def can_seat(self, guests: int) -> bool:
        """Check if the table is large enough for a party"""
        return self.capacity >= guests
