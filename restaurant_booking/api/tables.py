"""
Tables API endpoints
"""

from fastapi import APIRouter, Depends, Query, Response, status
from typing import List
import structlog

from restaurant_booking.core.dependencies import get_current_principal, get_table_registry
from restaurant_booking.core.permissions import Permission, Principal, require_permission
from restaurant_booking.models.table import TableStatus
from restaurant_booking.schemas.table import TableCreate, TableUpdate, TableView
from restaurant_booking.services.table_registry import TableRegistry

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/", response_model=List[TableView])
def list_tables(
    principal: Principal = Depends(get_current_principal),
    registry: TableRegistry = Depends(get_table_registry)
):
    """List all tables"""
    require_permission(principal, Permission.TABLES_VIEW)
    return registry.list_tables()


@router.get("/available", response_model=List[TableView])
def list_available_tables(
    principal: Principal = Depends(get_current_principal),
    registry: TableRegistry = Depends(get_table_registry)
):
    """List tables currently AVAILABLE, smallest first"""
    require_permission(principal, Permission.TABLES_VIEW)
    return registry.list_available()


@router.get("/available/{guests}", response_model=List[TableView])
def list_available_tables_for(
    guests: int,
    principal: Principal = Depends(get_current_principal),
    registry: TableRegistry = Depends(get_table_registry)
):
    """List AVAILABLE tables that can seat a party"""
    require_permission(principal, Permission.TABLES_VIEW)
    return registry.list_available_for(guests)


@router.get("/{table_id}", response_model=TableView)
def get_table(
    table_id: int,
    principal: Principal = Depends(get_current_principal),
    registry: TableRegistry = Depends(get_table_registry)
):
    """Get table by ID"""
    require_permission(principal, Permission.TABLES_VIEW)
    return registry.get(table_id)


@router.post("/", response_model=TableView, status_code=status.HTTP_201_CREATED)
def create_table(
    table_data: TableCreate,
    principal: Principal = Depends(get_current_principal),
    registry: TableRegistry = Depends(get_table_registry)
):
    """Create a new table"""
    return registry.create_table(principal, table_data)


@router.patch("/{table_id}/status", response_model=TableView)
def update_table_status(
    table_id: int,
    status: TableStatus = Query(...),
    principal: Principal = Depends(get_current_principal),
    registry: TableRegistry = Depends(get_table_registry)
):
    """Set a table's status directly"""
    return registry.update_status(principal, table_id, status)


@router.put("/{table_id}", response_model=TableView)
def update_table(
    table_id: int,
    table_data: TableUpdate,
    principal: Principal = Depends(get_current_principal),
    registry: TableRegistry = Depends(get_table_registry)
):
    """Replace a table's number, capacity, location, status and description"""
    return registry.update_table(principal, table_id, table_data)


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_table(
    table_id: int,
    principal: Principal = Depends(get_current_principal),
    registry: TableRegistry = Depends(get_table_registry)
):
    """Delete a table without reservations (administrators only)"""
    registry.delete_table(principal, table_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
