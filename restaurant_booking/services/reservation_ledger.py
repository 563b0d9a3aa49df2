"""
Reservation ledger: storage and queries over reservation records
"""

from datetime import date, time
from typing import List, Optional

from sqlmodel import Session, select

from restaurant_booking.core.errors import NotFound
from restaurant_booking.models.reservation import (
    ACTIVE_STATUSES,
    Reservation,
    ReservationStatus,
)


class ReservationLedger:
    """Reservation records keyed by id"""

    def __init__(self, session: Session):
        self.session = session

    def get(self, reservation_id: int) -> Reservation:
        reservation = self.session.get(Reservation, reservation_id)
        if reservation is None:
            raise NotFound("Reservation", reservation_id)
        return reservation

    def add(self, reservation: Reservation):
        self.session.add(reservation)

    def delete(self, reservation: Reservation):
        self.session.delete(reservation)

    def list_all(self) -> List[Reservation]:
        return self._list(select(Reservation).order_by(Reservation.id))

    def list_by_user(self, user_id: int) -> List[Reservation]:
        return self._list(
            select(Reservation)
            .where(Reservation.user_id == user_id)
            .order_by(Reservation.reservation_date, Reservation.reservation_time)
        )

    def list_by_date(self, on: date) -> List[Reservation]:
        return self._list(
            select(Reservation)
            .where(Reservation.reservation_date == on)
            .order_by(Reservation.reservation_time, Reservation.table_id)
        )

    def list_by_date_and_status(self, on: date, status: ReservationStatus) -> List[Reservation]:
        return self._list(
            select(Reservation)
            .where(Reservation.reservation_date == on, Reservation.status == status)
            .order_by(Reservation.reservation_time, Reservation.table_id)
        )

    def list_between(self, start: date, end: date) -> List[Reservation]:
        """Reservations with start <= date <= end, ordered by date then time"""
        return self._list(
            select(Reservation)
            .where(Reservation.reservation_date >= start, Reservation.reservation_date <= end)
            .order_by(Reservation.reservation_date, Reservation.reservation_time)
        )

    def find_active_for_slot(
        self,
        table_id: int,
        on: date,
        at: time,
        exclude_id: Optional[int] = None,
    ) -> List[Reservation]:
        """Active reservations holding exactly this table, date and time"""
        query = select(Reservation).where(
            Reservation.table_id == table_id,
            Reservation.reservation_date == on,
            Reservation.reservation_time == at,
            Reservation.status.in_(ACTIVE_STATUSES),
        )
        if exclude_id is not None:
            query = query.where(Reservation.id != exclude_id)
        return self._list(query)

    def _list(self, query) -> List[Reservation]:
        return list(self.session.exec(query).all())
