"""Password hashing and bearer token helpers."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from starlette.concurrency import run_in_threadpool
from werkzeug.security import check_password_hash, generate_password_hash

from .config import Settings


async def hash_password(password: str) -> str:
    """Hash a password off the event loop."""
    return await run_in_threadpool(generate_password_hash, password)


async def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against its stored hash off the event loop."""
    return await run_in_threadpool(check_password_hash, password_hash, password)


def create_access_token(
    settings: Settings,
    user_id: int,
    email: str,
    user_type: str,
    now: datetime | None = None,
) -> str:
    """
    Issue a signed bearer token for a user.

    Args:
        settings: Settings holding the secret, algorithm and validity window
        user_id: Subject of the token
        email: User email, copied into the claims
        user_type: ``tourist`` or ``guide``
        now: Issue time, defaults to the current UTC time

    Returns:
        str: Encoded JWT
    """
    issued_at = now or datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "user_type": user_type,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.access_token_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    """
    Verify a bearer token and return its claims.

    Raises:
        jwt.PyJWTError: If the signature, expiry or claims are invalid
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )
