"""Notification inbox router."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import CURRENT_USER_DEPENDENCY
from ..core.exceptions import InternalServerError
from ..schemas.auth import AuthenticatedUser
from ..schemas.common import Envelope, MessageResponse
from ..schemas.notification import Notification, UnreadCountResponse
from ..services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

DB_DEPENDENCY = Depends(get_db)


@router.get("", response_model=list[Notification])
async def list_notifications(
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> list[Notification]:
    """The caller's notifications, newest first."""
    try:
        notifications = await NotificationService(db).list_for_user(current_user.user_id)
    except SQLAlchemyError as e:
        logger.error("Database error listing notifications", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))
    return [Notification.model_validate(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> UnreadCountResponse:
    try:
        count = await NotificationService(db).unread_count(current_user.user_id)
    except SQLAlchemyError as e:
        logger.error("Database error counting notifications", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))
    return UnreadCountResponse(unread_count=count)


@router.patch("/mark-all-read", response_model=MessageResponse)
async def mark_all_read(
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> MessageResponse:
    try:
        await NotificationService(db).mark_all_as_read(current_user.user_id)
    except SQLAlchemyError as e:
        logger.error("Database error marking notifications read", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))
    return MessageResponse(message="All notifications marked as read")


@router.patch("/{notification_id}/read", response_model=Envelope[Notification])
async def mark_read(
    notification_id: int,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Mark one of the caller's notifications as read."""
    try:
        notification = await NotificationService(db).mark_as_read(notification_id, current_user.user_id)
    except SQLAlchemyError as e:
        logger.error(
            "Database error marking notification read",
            extra={"notification_id": notification_id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(str(e))

    response_data = Envelope[Notification](
        message="Notification marked as read",
        data=Notification.model_validate(notification),
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
