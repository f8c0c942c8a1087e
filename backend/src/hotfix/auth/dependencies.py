"""FastAPI dependencies for authentication.

Usage:
    @router.post("/ftp")
    def fetch(user: CurrentUser):
        ...
"""

import logging
from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .jwt import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme
security = HTTPBearer()


@dataclass
class AuthenticatedUser:
    """Identity taken from a validated access token."""
    id: UUID
    email: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AuthenticatedUser:
    """Validate the bearer token and return the caller's identity.

    Raises:
        HTTPException 401: If the token is missing, invalid, expired, or
            lacks a user ID claim
    """
    try:
        payload = decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise _unauthorized("Invalid authentication credentials")

    user_id_str = payload.get("sub")
    if not user_id_str:
        raise _unauthorized("Invalid token: missing user ID claim")

    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise _unauthorized("Invalid token: malformed user ID claim")

    return AuthenticatedUser(id=user_id, email=payload.get("email", ""))


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
