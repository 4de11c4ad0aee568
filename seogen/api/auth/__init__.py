"""Authentication module."""

from .middleware import (
    DEV_USER_ID,
    create_access_token,
    get_current_user,
    security,
    verify_token,
)
from .schemas import AuthFailureLog, AuthUser, TokenPayload

__all__ = [
    # Middleware
    "get_current_user",
    "verify_token",
    "create_access_token",
    "security",
    "DEV_USER_ID",
    # Schemas
    "AuthUser",
    "TokenPayload",
    "AuthFailureLog",
]
