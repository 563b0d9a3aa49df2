"""
Unit test for JWT authentication
"""

from datetime import datetime, timedelta, timezone
from jose import jwt

from restaurant_booking.core.auth import create_access_token, decode_access_token, verify_token
from restaurant_booking.core.config import get_settings
from restaurant_booking.core.permissions import Permission
from restaurant_booking.models.user import UserRole

settings = get_settings()


def test_create_access_token():
    """Test JWT token creation"""
    token = create_access_token(user_id=42, role=UserRole.STAFF, expires_delta=timedelta(hours=24))

    assert token is not None
    assert isinstance(token, str)

    # Verify payload
    payload = decode_access_token(token)
    assert payload is not None
    assert payload["sub"] == "42"
    assert payload["role"] == "STAFF"
    assert "exp" in payload


def test_verify_token_returns_principal():
    """Test a valid token resolves to the caller and their role"""
    token = create_access_token(user_id=7, role="customer")

    principal = verify_token(token)

    assert principal is not None
    assert principal.user_id == 7
    assert principal.role == UserRole.CUSTOMER
    assert principal.can(Permission.RESERVATION_CREATE)
    assert not principal.can(Permission.RESERVATION_VIEW_ALL)


def test_verify_invalid_token():
    """Test token verification with invalid token"""
    invalid_token = "invalid.token.string.here"

    assert verify_token(invalid_token) is None
    assert decode_access_token(invalid_token) is None


def test_verify_expired_token():
    """Test expired tokens are rejected"""
    token = create_access_token(user_id=1, role=UserRole.ADMIN, expires_delta=timedelta(seconds=-1))

    assert verify_token(token) is None


def test_verify_token_wrong_secret():
    """Test tokens signed with another key are rejected"""
    token = jwt.encode(
        {"sub": "1", "role": "ADMIN", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "some-other-secret",
        algorithm=settings.JWT_ALGORITHM,
    )

    assert verify_token(token) is None


def test_verify_token_unknown_role():
    """Test a token with a role outside the RBAC table is rejected"""
    token = create_access_token(user_id=3, role="sommelier")

    assert verify_token(token) is None
