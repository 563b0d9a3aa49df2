"""
Table registry: table identity, capacity and occupancy status
"""

from typing import List

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
import structlog

from restaurant_booking.core.errors import DuplicateTableNumber, NotFound, TableInUse
from restaurant_booking.core.permissions import Permission, Principal, require_permission
from restaurant_booking.models.base import utc_now
from restaurant_booking.models.reservation import Reservation
from restaurant_booking.models.table import Table, TableStatus
from restaurant_booking.schemas.table import TableCreate, TableUpdate

logger = structlog.get_logger(__name__)


class TableRegistry:
    """Reads and writes tables within the caller's session"""

    def __init__(self, session: Session):
        self.session = session

    def get(self, table_id: int) -> Table:
        table = self.session.get(Table, table_id)
        if table is None:
            raise NotFound("Table", table_id)
        return table

    def get_for_update(self, table_id: int) -> Table:
        """Load a table and lock its row until the transaction ends.

        Backends without row locks (SQLite) render a plain SELECT.
        """
        table = self.session.exec(
            select(Table).where(Table.id == table_id).with_for_update()
        ).first()
        if table is None:
            raise NotFound("Table", table_id)
        return table

    def exists(self, table_id: int) -> bool:
        return self.session.get(Table, table_id) is not None

    def set_status(self, table: Table, status: TableStatus):
        """Stage a status change; the caller commits"""
        table.status = status
        table.updated_at = utc_now()
        self.session.add(table)

    def list_tables(self) -> List[Table]:
        return list(self.session.exec(select(Table).order_by(Table.table_number)).all())

    def list_available(self) -> List[Table]:
        """Available tables, smallest first"""
        return list(self.session.exec(
            select(Table)
            .where(Table.status == TableStatus.AVAILABLE)
            .order_by(Table.capacity, Table.table_number)
        ).all())

    def list_available_for(self, guests: int) -> List[Table]:
        """Available tables large enough for a party"""
        return list(self.session.exec(
            select(Table)
            .where(Table.status == TableStatus.AVAILABLE, Table.capacity >= guests)
            .order_by(Table.capacity, Table.table_number)
        ).all())

    def create_table(self, principal: Principal, data: TableCreate) -> Table:
        """Add a table to the catalog"""
        require_permission(principal, Permission.TABLES_EDIT)

        if self._number_taken(data.table_number):
            raise DuplicateTableNumber(data.table_number)

        table = Table(
            table_number=data.table_number,
            capacity=data.capacity,
            location=data.location,
            status=data.status,
            description=data.description,
        )
        self.session.add(table)
        try:
            self.session.commit()
        except IntegrityError as e:
            # Lost a race with another create for the same number
            self.session.rollback()
            raise DuplicateTableNumber(data.table_number) from e
        self.session.refresh(table)

        logger.info(f"Table created: {table.id} (number {table.table_number})")
        return table

    def update_table(self, principal: Principal, table_id: int, data: TableUpdate) -> Table:
        """Replace a table's catalog entry; a new number must still be unique"""
        require_permission(principal, Permission.TABLES_EDIT)

        table = self.get(table_id)
        if data.table_number != table.table_number and self._number_taken(data.table_number):
            raise DuplicateTableNumber(data.table_number)

        table.table_number = data.table_number
        table.capacity = data.capacity
        table.location = data.location
        table.status = data.status
        table.description = data.description
        table.updated_at = utc_now()
        self.session.add(table)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateTableNumber(data.table_number) from e
        self.session.refresh(table)

        logger.info(f"Table updated: {table.id} (number {table.table_number})")
        return table

    def delete_table(self, principal: Principal, table_id: int):
        """Remove a table that no reservation refers to"""
        require_permission(principal, Permission.TABLES_EDIT)

        table = self.get(table_id)
        referenced = self.session.exec(
            select(Reservation.id).where(Reservation.table_id == table_id)
        ).first()
        if referenced is not None:
            raise TableInUse(table.table_number)

        table_number = table.table_number
        self.session.delete(table)
        self.session.commit()
        logger.info(f"Table deleted: {table_id} (number {table_number})")

    def update_status(self, principal: Principal, table_id: int, status: TableStatus) -> Table:
        """Direct staff override, e.g. taking a table out for maintenance"""
        require_permission(principal, Permission.TABLES_CHANGE_STATUS)

        table = self.get(table_id)
        previous = table.status
        self.set_status(table, status)
        self.session.commit()
        self.session.refresh(table)

        logger.info(f"Table {table.table_number} status {previous.value} -> {status.value}")
        return table

    def _number_taken(self, table_number: int) -> bool:
        return self.session.exec(
            select(Table.id).where(Table.table_number == table_number)
        ).first() is not None
