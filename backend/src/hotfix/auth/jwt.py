"""JWT access token creation and validation.

Tokens are issued by the session provider of the editor front end and
carry the user identity; the sync endpoints validate them statelessly.

Claims:
- sub: User ID as UUID string
- email: User's email address
- iat / exp: Issue and expiry timestamps

Algorithm: HS256 with the JWT_SECRET environment variable.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from uuid import UUID

import jwt


def _get_jwt_secret() -> str:
    """Get JWT_SECRET from environment.

    Raises:
        ValueError: If JWT_SECRET is not set
    """
    secret = os.getenv('JWT_SECRET')
    if not secret:
        raise ValueError("JWT_SECRET environment variable is not set")
    return secret


def _get_jwt_expiry_minutes() -> int:
    expiry = os.getenv('JWT_EXPIRY_MINUTES', '60')
    try:
        return int(expiry)
    except ValueError:
        return 60


def create_access_token(user_id: UUID, email: str) -> str:
    """Create a signed access token for a user.

    Args:
        user_id: User's UUID
        email: User's email address

    Returns:
        str: Signed JWT token

    Raises:
        ValueError: If JWT_SECRET is not set
    """
    now = datetime.now(timezone.utc)
    expiration = now + timedelta(minutes=_get_jwt_expiry_minutes())

    payload = {
        'sub': str(user_id),
        'email': email,
        'iat': int(now.timestamp()),
        'exp': int(expiration.timestamp()),
    }
    return jwt.encode(payload, _get_jwt_secret(), algorithm='HS256')


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and validate a JWT token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or tampered
        ValueError: If JWT_SECRET is not set
    """
    secret = _get_jwt_secret()

    try:
        return jwt.decode(token, secret, algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        raise jwt.ExpiredSignatureError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise jwt.InvalidTokenError(f"Invalid token: {str(e)}")
