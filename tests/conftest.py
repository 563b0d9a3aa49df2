"""
Test configuration for pytest
"""

import pytest
import os
from datetime import date, time
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session
from typing import Generator

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["LOG_JSON"] = "false"

import restaurant_booking.models  # noqa: E402,F401
from restaurant_booking.core.database import build_engine  # noqa: E402
from restaurant_booking.core.events import (  # noqa: E402
    EventBus,
    ReservationCreated,
    ReservationDeleted,
    ReservationStatusChanged,
)
from restaurant_booking.core.permissions import Principal  # noqa: E402
from restaurant_booking.models import Table, TableLocation, User, UserRole  # noqa: E402
from restaurant_booking.schemas.reservation import ReservationCreate  # noqa: E402
from restaurant_booking.services.reservation_lifecycle import ReservationLifecycle  # noqa: E402

# Fixed "today" for lifecycle tests
TODAY = date(2030, 6, 15)
DINNER = time(19, 0)


# Create test engine using in-memory SQLite for unit tests
test_engine = build_engine("sqlite://", poolclass=StaticPool)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    # Create all tables
    SQLModel.metadata.create_all(test_engine)

    # Create session
    with Session(test_engine) as session:
        yield session

    # Cleanup
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(scope="function")
def file_engine(tmp_path):
    """File-backed SQLite engine for tests that use several connections"""
    engine = build_engine(f"sqlite:///{tmp_path / 'booking.db'}")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


def add_user(session: Session, username: str, role: UserRole, phone: str = "600123456") -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        full_name=username.capitalize() + " Test",
        phone=phone,
        role=role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def add_table(session: Session, number: int, capacity: int, **kwargs) -> Table:
    table = Table(table_number=number, capacity=capacity, location=TableLocation.INDOOR, **kwargs)
    session.add(table)
    session.commit()
    session.refresh(table)
    return table


@pytest.fixture
def admin_user(db: Session) -> User:
    return add_user(db, "admin", UserRole.ADMIN)


@pytest.fixture
def staff_user(db: Session) -> User:
    return add_user(db, "waiter", UserRole.STAFF)


@pytest.fixture
def customer(db: Session) -> User:
    return add_user(db, "alice", UserRole.CUSTOMER)


@pytest.fixture
def other_customer(db: Session) -> User:
    return add_user(db, "bob", UserRole.CUSTOMER, phone="600999888")


@pytest.fixture
def table(db: Session) -> Table:
    """Table #5 seating four"""
    return add_table(db, 5, 4)


@pytest.fixture
def large_table(db: Session) -> Table:
    return add_table(db, 8, 8, description="Corner booth")


@pytest.fixture
def admin(admin_user: User) -> Principal:
    return Principal(user_id=admin_user.id, role=UserRole.ADMIN)


@pytest.fixture
def staff(staff_user: User) -> Principal:
    return Principal(user_id=staff_user.id, role=UserRole.STAFF)


@pytest.fixture
def customer_principal(customer: User) -> Principal:
    return Principal(user_id=customer.id, role=UserRole.CUSTOMER)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def published(bus: EventBus) -> list:
    """Every lifecycle event published on the test bus, in order"""
    events = []
    for event_type in (ReservationCreated, ReservationStatusChanged, ReservationDeleted):
        bus.subscribe(event_type.__name__, events.append)
    return events


@pytest.fixture
def lifecycle(db: Session, bus: EventBus) -> ReservationLifecycle:
    return ReservationLifecycle(db, bus=bus, today=lambda: TODAY)


@pytest.fixture
def booking():
    """Factory for reservation requests"""
    def _booking(user: User, table: Table, **overrides) -> ReservationCreate:
        data = {
            "user_id": user.id,
            "table_id": table.id,
            "reservation_date": TODAY,
            "reservation_time": DINNER,
            "guests": 2,
        }
        data.update(overrides)
        return ReservationCreate(**data)
    return _booking
