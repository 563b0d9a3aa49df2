"""
User model as projected from the identity provider
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import DateTime
from datetime import datetime
from typing import Optional, TYPE_CHECKING
from enum import Enum

from restaurant_booking.models.base import utc_now

if TYPE_CHECKING:
    from restaurant_booking.models.reservation import Reservation


class UserRole(str, Enum):
    """User roles for RBAC"""
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    CUSTOMER = "CUSTOMER"


class User(SQLModel, table=True):
    """Registered user who can own reservations"""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)

    username: str = Field(index=True, unique=True, nullable=False, max_length=100)
    email: str = Field(index=True, unique=True, nullable=False, max_length=255)

    # Profile
    full_name: str = Field(nullable=False, max_length=200)
    phone: Optional[str] = Field(default=None, max_length=20, nullable=True)

    # RBAC
    role: UserRole = Field(default=UserRole.CUSTOMER, nullable=False)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    reservations: list["Reservation"] = Relationship(back_populates="user")
