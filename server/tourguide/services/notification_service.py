"""Notification service for inbox operations and lifecycle side effects."""

import logging
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError
from ..core.observability import metrics_collector
from ..models.notification import Notification, NotificationType

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for notification-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_notification(
        self,
        user_id: int,
        title: str,
        message: str,
        notification_type: NotificationType,
        related_id: Optional[int] = None,
        related_type: Optional[str] = None,
    ) -> Notification:
        """
        Insert and commit a notification for ``user_id``.

        Raises:
            SQLAlchemyError: If the insert fails
        """
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=notification_type.value,
            related_id=related_id,
            related_type=related_type,
        )
        self.db.add(notification)
        await self.db.commit()
        await self.db.refresh(notification)

        metrics_collector.record_notification_created(notification_type.value)
        logger.info(
            "Notification created",
            extra={
                "notification_id": notification.id,
                "user_id": user_id,
                "type": notification_type.value,
                "related_id": related_id,
            }
        )
        return notification

    async def notify_best_effort(
        self,
        user_id: int,
        title: str,
        message: str,
        notification_type: NotificationType,
        related_id: Optional[int] = None,
        related_type: Optional[str] = None,
    ) -> Optional[Notification]:
        """
        Create a notification after the primary write has committed.

        Notifications are advisory: a storage failure is rolled back, logged
        and counted, and None is returned instead of raising.
        """
        try:
            return await self.create_notification(
                user_id=user_id,
                title=title,
                message=message,
                notification_type=notification_type,
                related_id=related_id,
                related_type=related_type,
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            metrics_collector.record_notification_failed(notification_type.value)
            logger.error(
                "Notification could not be stored",
                extra={
                    "user_id": user_id,
                    "type": notification_type.value,
                    "related_id": related_id,
                    "error": str(e),
                },
                exc_info=True
            )
            return None

    async def list_for_user(self, user_id: int) -> list[Notification]:
        """Return the user's notifications, newest first."""
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def unread_count(self, user_id: int) -> int:
        stmt = (
            select(func.count(Notification.id))
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def mark_as_read(self, notification_id: int, user_id: int) -> Notification:
        """
        Mark one of the user's notifications as read.

        Raises:
            NotFoundError: If the notification does not exist or belongs to someone else
        """
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        )
        result = await self.db.execute(stmt)
        notification = result.scalar_one_or_none()
        if not notification:
            raise NotFoundError(resource_type="notification", resource_id=notification_id)

        notification.is_read = True
        await self.db.commit()
        await self.db.refresh(notification)
        return notification

    async def mark_all_as_read(self, user_id: int) -> int:
        """Mark every unread notification of the user as read; returns how many changed."""
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()

        logger.info(
            "Notifications marked as read",
            extra={"user_id": user_id, "count": result.rowcount}
        )
        return result.rowcount
