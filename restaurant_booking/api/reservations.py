"""
Reservations API endpoints
"""

from fastapi import APIRouter, Depends, Query, Response, status
from typing import List
from datetime import date, time
import structlog

from restaurant_booking.core.dependencies import get_current_principal, get_reservation_lifecycle
from restaurant_booking.core.permissions import Principal
from restaurant_booking.models.reservation import ReservationStatus
from restaurant_booking.schemas.reservation import ReservationCreate, ReservationView
from restaurant_booking.services.reservation_lifecycle import ReservationLifecycle

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/", response_model=List[ReservationView])
def list_reservations(
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """List reservations (customers only see their own)"""
    return lifecycle.list_all(principal)


@router.get("/mine", response_model=List[ReservationView])
def list_my_reservations(
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """List the caller's own reservations"""
    return lifecycle.list_by_user(principal, principal.user_id)


@router.get("/check-availability", response_model=bool)
def check_availability(
    table_id: int = Query(...),
    on: date = Query(..., alias="date", description="Reservation date (YYYY-MM-DD)"),
    at: time = Query(..., alias="time", description="Reservation time (HH:MM)"),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Check whether a table is free at an exact date and time"""
    return lifecycle.is_table_available(table_id, on, at)


@router.get("/today/confirmed", response_model=List[ReservationView])
def list_today_confirmed(
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Confirmed reservations for today"""
    return lifecycle.list_today_confirmed(principal)


@router.get("/between", response_model=List[ReservationView])
def list_between_dates(
    start_date: date = Query(...),
    end_date: date = Query(...),
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Reservations in an inclusive date range, ordered by date and time"""
    return lifecycle.list_between(principal, start_date, end_date)


@router.get("/date/{on}", response_model=List[ReservationView])
def list_by_date(
    on: date,
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Reservations on a date"""
    return lifecycle.list_by_date(principal, on)


@router.get("/user/{user_id}", response_model=List[ReservationView])
def list_by_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Reservations belonging to a user"""
    return lifecycle.list_by_user(principal, user_id)


@router.get("/{reservation_id}", response_model=ReservationView)
def get_reservation(
    reservation_id: int,
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Get reservation by ID"""
    return lifecycle.get(principal, reservation_id)


@router.post("/", response_model=ReservationView, status_code=status.HTTP_201_CREATED)
def create_reservation(
    reservation_data: ReservationCreate,
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Create a new reservation in PENDING status"""
    return lifecycle.create(principal, reservation_data)


@router.patch("/{reservation_id}/status", response_model=ReservationView)
def update_reservation_status(
    reservation_id: int,
    status: ReservationStatus = Query(...),
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Change reservation status and sync the table"""
    return lifecycle.change_status(principal, reservation_id, status)


@router.patch("/{reservation_id}/cancel", response_model=ReservationView)
def cancel_reservation(
    reservation_id: int,
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Cancel a reservation"""
    return lifecycle.cancel(principal, reservation_id)


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reservation(
    reservation_id: int,
    principal: Principal = Depends(get_current_principal),
    lifecycle: ReservationLifecycle = Depends(get_reservation_lifecycle)
):
    """Delete a reservation (administrators only)"""
    lifecycle.delete(principal, reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
