"""FastAPI dependencies for settings and authentication."""

import logging
from typing import Optional

import jwt
from fastapi import Depends, Header, Request
from jwt import PyJWTError

from ..models.user import UserType
from ..schemas.auth import AuthenticatedUser
from .config import Settings
from .exceptions import AuthenticationError, AuthorizationError
from .security import decode_access_token

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


SETTINGS_DEPENDENCY = Depends(get_settings)


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    settings: Settings = SETTINGS_DEPENDENCY,
) -> AuthenticatedUser:
    """
    Authentication dependency that validates Bearer tokens.

    Args:
        authorization: Authorization header with Bearer token
        settings: Application settings

    Returns:
        AuthenticatedUser: Identity carried by the token

    Raises:
        AuthenticationError: If the header or the token is missing
        AuthorizationError: If the token is invalid or expired
    """
    if not authorization:
        raise AuthenticationError("Access token required")

    parts = authorization.split()
    if len(parts) < 2:
        raise AuthenticationError("Access token required")
    token = parts[1]

    try:
        payload = decode_access_token(settings, token)
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired bearer token")
        raise AuthorizationError("Token expired")
    except PyJWTError as e:
        logger.info("Rejected invalid bearer token", extra={"error": str(e)})
        raise AuthorizationError("Invalid token")

    try:
        return AuthenticatedUser(
            user_id=int(payload["sub"]),
            email=payload.get("email", ""),
            user_type=UserType(payload.get("user_type")),
        )
    except (ValueError, TypeError):
        raise AuthorizationError("Invalid token")


# Reusable dependency markers
CURRENT_USER_DEPENDENCY = Depends(get_current_user)
