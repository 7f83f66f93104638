"""Authentication router: registration and login."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings
from ..core.database import get_db
from ..core.dependencies import SETTINGS_DEPENDENCY
from ..core.exceptions import InternalServerError
from ..schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from ..services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

DB_DEPENDENCY = Depends(get_db)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    db: AsyncSession = DB_DEPENDENCY,
    settings: Settings = SETTINGS_DEPENDENCY,
) -> JSONResponse:
    """
    Register a tourist or guide.

    Returns the created user and a bearer token.
    """
    auth_service = AuthService(db, settings)
    try:
        user, token = await auth_service.register(request)
    except SQLAlchemyError as e:
        logger.error("Database error during registration", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))

    response_data = AuthResponse(
        message="User registered successfully",
        user=UserPublic.model_validate(user),
        token=token,
    )
    return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = DB_DEPENDENCY,
    settings: Settings = SETTINGS_DEPENDENCY,
) -> JSONResponse:
    """Exchange email and password for a bearer token."""
    auth_service = AuthService(db, settings)
    try:
        user, token = await auth_service.login(request)
    except SQLAlchemyError as e:
        logger.error("Database error during login", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))

    response_data = AuthResponse(
        message="Login successful",
        user=UserPublic.model_validate(user),
        token=token,
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
