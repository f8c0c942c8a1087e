"""Authentication gate for the sync endpoints (bearer JWT)."""

from .dependencies import AuthenticatedUser, CurrentUser, get_current_user
from .jwt import create_access_token, decode_token

__all__ = [
    "AuthenticatedUser",
    "CurrentUser",
    "get_current_user",
    "create_access_token",
    "decode_token",
]
