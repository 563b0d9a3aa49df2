"""
Authentication and service dependencies for FastAPI
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session
import structlog

from restaurant_booking.core.auth import verify_token
from restaurant_booking.core.database import get_session
from restaurant_booking.core.events import event_bus
from restaurant_booking.core.permissions import Principal
from restaurant_booking.services.reservation_lifecycle import ReservationLifecycle
from restaurant_booking.services.table_registry import TableRegistry

logger = structlog.get_logger(__name__)
security = HTTPBearer()


def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> Principal:
    """Get the authenticated caller from the JWT bearer token"""
    principal = verify_token(credentials.credentials)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"User authenticated: {principal.user_id} ({principal.role.value})")
    return principal


def get_table_registry(session: Session = Depends(get_session)) -> TableRegistry:
    return TableRegistry(session)


def get_reservation_lifecycle(session: Session = Depends(get_session)) -> ReservationLifecycle:
    return ReservationLifecycle(session, bus=event_bus)
