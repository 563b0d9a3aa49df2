"""
Pydantic schemas for tables
"""

from pydantic import BaseModel, Field
from typing import Optional

from restaurant_booking.models.table import TableLocation, TableStatus


class TableCreate(BaseModel):
    """Table catalog entry schema"""
    table_number: int = Field(..., ge=1)
    capacity: int = Field(..., ge=1)
    location: TableLocation = TableLocation.INDOOR
    status: TableStatus = TableStatus.AVAILABLE
    description: Optional[str] = Field(default=None, max_length=500)


class TableView(BaseModel):
    """Table response model"""
    id: int
    table_number: int
    capacity: int
    location: TableLocation
    status: TableStatus
    description: Optional[str] = None

    class Config:
        from_attributes = True


class TableUpdate(TableCreate):
    """Full replacement of a table's catalog entry"""
