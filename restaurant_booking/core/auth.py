"""
JWT Authentication utilities

Tokens are issued by the identity provider; this service only needs to read
the subject and role claims. create_access_token exists for local tooling and
tests.
"""

from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from typing import Dict, Optional

from restaurant_booking.core.config import get_settings
from restaurant_booking.core.permissions import Principal
from restaurant_booking.models.user import UserRole

settings = get_settings()


def create_access_token(
    user_id: int,
    role: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token with user claims"""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "role": role.value if isinstance(role, UserRole) else role,
        "exp": expire,
        "iat": datetime.now(timezone.utc),
    }

    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> Optional[Dict]:
    """Decode and validate JWT token"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        return None


def verify_token(token: str) -> Optional[Principal]:
    """Verify token and return the caller if valid"""
    payload = decode_access_token(token)
    if payload is None:
        return None

    try:
        return Principal(
            user_id=int(payload.get("sub")),
            role=UserRole(str(payload.get("role", "")).upper()),
        )
    except (TypeError, ValueError):
        return None
