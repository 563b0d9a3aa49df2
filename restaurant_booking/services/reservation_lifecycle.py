"""
Reservation lifecycle engine

Creates reservations, applies status transitions and keeps the table's
physical status in step with them. Each command is one unit of work on the
session: every write it stages is committed together or rolled back together,
and lifecycle events are published only after the commit succeeded.

Double-booking is closed at two levels. Creation locks the table row before
checking the slot (a real lock on PostgreSQL), and the partial unique index
``uq_reservation_active_slot`` rejects a second active reservation for the
same slot on every backend. Both surface as SlotConflict.
"""

from contextlib import contextmanager
from datetime import date, time
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
import structlog

from restaurant_booking.core.errors import (
    CapacityExceeded,
    InvalidInput,
    NotFound,
    PastDate,
    SlotConflict,
)
from restaurant_booking.core.events import (
    EventBus,
    ReservationCreated,
    ReservationDeleted,
    ReservationStatusChanged,
    event_bus,
)
from restaurant_booking.core.permissions import (
    Permission,
    Principal,
    require_owner_or,
    require_permission,
)
from restaurant_booking.models.base import utc_now
from restaurant_booking.models.reservation import (
    ACTIVE_STATUSES,
    TABLE_STATUS_FOR,
    Reservation,
    ReservationStatus,
)
from restaurant_booking.models.user import User
from restaurant_booking.schemas.reservation import ReservationCreate, ReservationView
from restaurant_booking.services.availability import AvailabilityChecker
from restaurant_booking.services.reservation_ledger import ReservationLedger
from restaurant_booking.services.table_registry import TableRegistry

logger = structlog.get_logger(__name__)

SLOT_INDEX_NAME = "uq_reservation_active_slot"


def _is_slot_violation(error: IntegrityError) -> bool:
    """Whether an IntegrityError came from the active-slot unique index"""
    diag = getattr(error.orig, "diag", None)
    if diag is not None:
        # psycopg2 reports the violated constraint by name
        return diag.constraint_name == SLOT_INDEX_NAME
    # SQLite only lists the indexed columns in its message
    return "UNIQUE constraint failed: reservations.table_id" in str(error.orig)


class ReservationLifecycle:
    """Reservation commands and queries over one database session"""

    def __init__(
        self,
        session: Session,
        bus: EventBus = event_bus,
        today: Callable[[], date] = date.today,
    ):
        self.session = session
        self.bus = bus
        self.today = today
        self.tables = TableRegistry(session)
        self.ledger = ReservationLedger(session)
        self.availability = AvailabilityChecker(self.ledger)

    @contextmanager
    def _unit_of_work(self):
        try:
            yield
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if _is_slot_violation(e):
                logger.info("Slot already held by an active reservation (rejected by index)")
                raise SlotConflict("A reservation already exists for this table at this time") from e
            raise
        except Exception:
            self.session.rollback()
            raise

    # ==================== COMMANDS ====================

    def create(self, principal: Principal, request: ReservationCreate) -> ReservationView:
        """Create a PENDING reservation for a free slot.

        Checks run in a fixed order and the first failure wins: user exists,
        table exists, date not in the past, capacity, slot free. The table's
        status is left alone; a PENDING reservation does not claim it.
        """
        require_permission(principal, Permission.RESERVATION_CREATE)
        require_owner_or(principal, request.user_id, Permission.RESERVATION_CREATE_ANY)
        if request.guests < 1:
            raise InvalidInput("There must be at least 1 guest")

        with self._unit_of_work():
            if self.session.get(User, request.user_id) is None:
                raise NotFound("User", request.user_id)

            table = self.tables.get_for_update(request.table_id)

            if request.reservation_date < self.today():
                raise PastDate("Cannot book a reservation for a past date")

            if not table.can_seat(request.guests):
                raise CapacityExceeded(table.capacity, request.guests)

            if self.availability.has_conflict(
                table.id, request.reservation_date, request.reservation_time
            ):
                logger.info(
                    f"Slot conflict for table {table.table_number} on "
                    f"{request.reservation_date} at {request.reservation_time}"
                )
                raise SlotConflict("A reservation already exists for this table at this time")

            now = utc_now()
            reservation = Reservation(
                user_id=request.user_id,
                table_id=table.id,
                reservation_date=request.reservation_date,
                reservation_time=request.reservation_time,
                guests=request.guests,
                special_requests=request.special_requests,
                status=ReservationStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            self.ledger.add(reservation)
            self.session.flush()

        self.session.refresh(reservation)
        logger.info(
            f"Reservation {reservation.id} created for table {reservation.table.table_number} "
            f"on {reservation.reservation_date} at {reservation.reservation_time}"
        )
        self.bus.publish(ReservationCreated.from_reservation(reservation))
        return ReservationView.from_reservation(reservation)

    def change_status(
        self,
        principal: Principal,
        reservation_id: int,
        new_status: ReservationStatus,
    ) -> ReservationView:
        """Move a reservation to any status and sync its table"""
        require_permission(principal, Permission.RESERVATION_CHANGE_STATUS)
        return self._transition(reservation_id, new_status)

    def cancel(self, principal: Principal, reservation_id: int) -> ReservationView:
        """Cancel a reservation; customers may only cancel their own"""
        require_permission(principal, Permission.RESERVATION_CANCEL_OWN)
        reservation = self.ledger.get(reservation_id)
        require_owner_or(principal, reservation.user_id, Permission.RESERVATION_CANCEL_ANY)
        return self._transition(reservation_id, ReservationStatus.CANCELLED)

    def delete(self, principal: Principal, reservation_id: int):
        """Administrative hard delete; the table status is not touched"""
        require_permission(principal, Permission.RESERVATION_DELETE)

        with self._unit_of_work():
            reservation = self.ledger.get(reservation_id)
            event = ReservationDeleted.from_reservation(reservation)
            if reservation.is_active():
                logger.warning(
                    f"Deleting active reservation {reservation.id} ({reservation.status.value}); "
                    f"table {reservation.table.table_number} keeps status "
                    f"{reservation.table.status.value}"
                )
            self.ledger.delete(reservation)

        logger.info(f"Reservation {reservation_id} deleted")
        self.bus.publish(event)

    def _transition(self, reservation_id: int, new_status: ReservationStatus) -> ReservationView:
        with self._unit_of_work():
            reservation = self.ledger.get(reservation_id)
            previous = reservation.status

            if new_status in ACTIVE_STATUSES and not reservation.is_active():
                # Reactivating must not double-book the slot
                if self.ledger.find_active_for_slot(
                    reservation.table_id,
                    reservation.reservation_date,
                    reservation.reservation_time,
                    exclude_id=reservation.id,
                ):
                    raise SlotConflict("A reservation already exists for this table at this time")

            reservation.status = new_status
            reservation.updated_at = utc_now()
            self.session.add(reservation)

            table_status = TABLE_STATUS_FOR.get(new_status)
            if table_status is not None:
                table = self.tables.get_for_update(reservation.table_id)
                self.tables.set_status(table, table_status)

            self.session.flush()

        self.session.refresh(reservation)
        if table_status is not None:
            logger.info(
                f"Reservation {reservation_id} {previous.value} -> {new_status.value}; "
                f"table {reservation.table.table_number} -> {table_status.value}"
            )
        else:
            logger.info(f"Reservation {reservation_id} {previous.value} -> {new_status.value}")

        self.bus.publish(ReservationStatusChanged.from_reservation(
            reservation, previous_status=previous.value
        ))
        return ReservationView.from_reservation(reservation)

    # ==================== QUERIES ====================

    def get(self, principal: Principal, reservation_id: int) -> ReservationView:
        require_permission(principal, Permission.RESERVATION_VIEW_OWN)
        reservation = self.ledger.get(reservation_id)
        require_owner_or(principal, reservation.user_id, Permission.RESERVATION_VIEW_ALL)
        return ReservationView.from_reservation(reservation)

    def list_all(self, principal: Principal) -> List[ReservationView]:
        """Every reservation for staff; a customer's own otherwise"""
        if principal.can(Permission.RESERVATION_VIEW_ALL):
            return self._views(self.ledger.list_all())
        require_permission(principal, Permission.RESERVATION_VIEW_OWN)
        return self._views(self.ledger.list_by_user(principal.user_id))

    def list_by_user(self, principal: Principal, user_id: int) -> List[ReservationView]:
        require_permission(principal, Permission.RESERVATION_VIEW_OWN)
        require_owner_or(principal, user_id, Permission.RESERVATION_VIEW_ALL)
        return self._views(self.ledger.list_by_user(user_id))

    def list_by_date(self, principal: Principal, on: date) -> List[ReservationView]:
        require_permission(principal, Permission.RESERVATION_VIEW_ALL)
        return self._views(self.ledger.list_by_date(on))

    def list_between(self, principal: Principal, start: date, end: date) -> List[ReservationView]:
        require_permission(principal, Permission.RESERVATION_VIEW_ALL)
        if start > end:
            raise InvalidInput("start_date must not be after end_date")
        return self._views(self.ledger.list_between(start, end))

    def list_today_confirmed(self, principal: Principal) -> List[ReservationView]:
        require_permission(principal, Permission.RESERVATION_VIEW_ALL)
        return self._views(
            self.ledger.list_by_date_and_status(self.today(), ReservationStatus.CONFIRMED)
        )

    def is_table_available(self, table_id: int, on: date, at: time) -> bool:
        """Public availability check for one exact slot"""
        if not self.tables.exists(table_id):
            raise NotFound("Table", table_id)
        return self.availability.is_available(table_id, on, at)

    @staticmethod
    def _views(reservations: List[Reservation]) -> List[ReservationView]:
        return [ReservationView.from_reservation(r) for r in reservations]
