"""Tour request service: the booking lifecycle and its notifications."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.exceptions import NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..models.notification import NotificationType
from ..models.tour import Tour
from ..models.tour_request import TourRequest, TourRequestStatus
from ..schemas.auth import AuthenticatedUser
from ..schemas.tour_request import CreateTourRequestRequest
from ..schemas.tour_request import TourRequest as TourRequestSchema
from .notification_service import NotificationService
from .tour_service import TourService

logger = logging.getLogger(__name__)

RELATED_TYPE = "tour_request"


def tour_request_to_schema(tour_request: TourRequest) -> TourRequestSchema:
    """Convert a request with tour and tourist loaded to the response schema."""
    data = TourRequestSchema.model_validate(tour_request)
    return data.model_copy(update={
        "tourist_name": tour_request.tourist.name if tour_request.tourist else None,
        "tour_title": tour_request.tour.title if tour_request.tour else None,
        "guide_id": tour_request.tour.guide_id if tour_request.tour else None,
    })


class TourRequestService:
    """
    Service for the tour request lifecycle.

    A request starts ``pending``; the guide approves or rejects it and the
    tourist may cancel it. Each transition commits first and then notifies
    the counterpart on a best-effort basis.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tour_service = TourService(db)
        self.notification_service = NotificationService(db)

    def _details_query(self):
        return (
            select(TourRequest)
            .options(selectinload(TourRequest.tour), selectinload(TourRequest.tourist))
            .execution_options(populate_existing=True)
        )

    async def get_request(self, request_id: int) -> Optional[TourRequest]:
        stmt = self._details_query().where(TourRequest.id == request_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_request_or_raise(self, request_id: int) -> TourRequest:
        """
        Get a tour request with its tour and tourist, or raise NotFoundError.
        """
        tour_request = await self.get_request(request_id)
        if not tour_request:
            logger.warning("Tour request not found", extra={"request_id": request_id})
            raise NotFoundError(resource_type="tour request", resource_id=request_id)
        return tour_request

    async def create_request(
        self,
        request: CreateTourRequestRequest,
        tourist: AuthenticatedUser
    ) -> TourRequest:
        """
        Create a pending tour request and notify the tour's guide.

        Args:
            request: Booking details
            tourist: Authenticated caller making the request

        Returns:
            Created tour request with tour and tourist loaded

        Raises:
            NotFoundError: If the tour does not exist
        """
        tour = await self.tour_service.get_tour_by_id_or_raise(request.tour_id)

        total_price = request.total_price
        if total_price is None:
            total_price = tour.quote(request.people_count)

        tour_request = TourRequest(
            tour_id=tour.id,
            tourist_id=tourist.user_id,
            request_date=request.request_date,
            people_count=request.people_count,
            total_price=total_price,
            special_requests=request.special_requests,
            status=TourRequestStatus.PENDING,
        )

        self.db.add(tour_request)
        await self.db.commit()

        metrics_collector.record_tour_request_created()
        logger.info(
            "Tour request created",
            extra={
                "request_id": tour_request.id,
                "tour_id": tour.id,
                "tourist_id": tourist.user_id,
                "people_count": request.people_count,
                "total_price": total_price,
            }
        )

        await self.notification_service.notify_best_effort(
            user_id=tour.guide_id,
            title="New tour request",
            message=f'You received a new request for the tour "{tour.title}"',
            notification_type=NotificationType.TOUR_REQUEST,
            related_id=tour_request.id,
            related_type=RELATED_TYPE,
        )

        return await self.get_request_or_raise(tour_request.id)

    async def list_for_user(self, user: AuthenticatedUser) -> list[TourRequest]:
        """
        Requests visible to the caller, newest first.

        Tourists see the requests they made; guides see requests for tours
        they own.
        """
        stmt = self._details_query()
        if user.is_guide:
            stmt = stmt.join(Tour, TourRequest.tour_id == Tour.id).where(Tour.guide_id == user.user_id)
        else:
            stmt = stmt.where(TourRequest.tourist_id == user.user_id)

        stmt = stmt.order_by(TourRequest.created_at.desc(), TourRequest.id.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _set_status(self, request_id: int, status: TourRequestStatus) -> TourRequest:
        tour_request = await self.get_request_or_raise(request_id)
        previous = TourRequestStatus(tour_request.status)

        if previous.is_terminal and previous is not status:
            logger.warning(
                "Overwriting terminal tour request status",
                extra={
                    "request_id": request_id,
                    "from_status": previous.value,
                    "to_status": status.value,
                }
            )

        tour_request.status = status
        await self.db.commit()

        metrics_collector.record_status_change(status.value)
        logger.info(
            "Tour request status changed",
            extra={
                "request_id": request_id,
                "from_status": previous.value,
                "to_status": status.value,
            }
        )
        return tour_request

    async def update_status(self, request_id: int, status: TourRequestStatus) -> TourRequest:
        """
        Approve or reject a request and notify the tourist.

        Any authenticated user may decide; ownership of the tour is not checked.

        Raises:
            ValidationError: If ``status`` is not approved or rejected
            NotFoundError: If the request does not exist (nothing is written)
        """
        if status not in (TourRequestStatus.APPROVED, TourRequestStatus.REJECTED):
            raise ValidationError("Invalid status", status=status.value)

        tour_request = await self._set_status(request_id, status)

        outcome = "approved" if status is TourRequestStatus.APPROVED else "rejected"
        await self.notification_service.notify_best_effort(
            user_id=tour_request.tourist_id,
            title=f"Request {outcome}",
            message=f"Your request for the tour was {outcome} by the guide",
            notification_type=NotificationType.TOUR_REQUEST_STATUS,
            related_id=tour_request.id,
            related_type=RELATED_TYPE,
        )
        return await self.get_request_or_raise(request_id)

    async def cancel(self, request_id: int) -> TourRequest:
        """
        Cancel a request whatever its current status and notify the guide.

        Raises:
            NotFoundError: If the request does not exist
        """
        tour_request = await self._set_status(request_id, TourRequestStatus.CANCELLED)

        if tour_request.tour is not None:
            await self.notification_service.notify_best_effort(
                user_id=tour_request.tour.guide_id,
                title="Request cancelled",
                message="A request for your tour was cancelled",
                notification_type=NotificationType.TOUR_REQUEST_CANCELLED,
                related_id=tour_request.id,
                related_type=RELATED_TYPE,
            )
        return await self.get_request_or_raise(request_id)
