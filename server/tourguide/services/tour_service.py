"""Tour service for business logic operations."""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.exceptions import AuthorizationError, NotFoundError
from ..models.review import TourReview
from ..models.tour import Tour
from ..schemas.auth import AuthenticatedUser
from ..schemas.tour import CreateTourRequest
from ..schemas.tour import Tour as TourSchema
from ..schemas.tour import TourDetail

logger = logging.getLogger(__name__)


def tour_to_schema(tour: Tour) -> TourSchema:
    """Convert a tour with its guide loaded to the response schema."""
    data = TourSchema.model_validate(tour)
    return data.model_copy(update={"guide_name": tour.guide.name if tour.guide else None})


class TourService:
    """Service for tour-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_tour(self, request: CreateTourRequest, guide: AuthenticatedUser) -> Tour:
        """
        Create a new tour owned by the calling guide.

        Args:
            request: Tour creation request
            guide: Authenticated caller

        Returns:
            Created tour entity

        Raises:
            AuthorizationError: If the caller is not a guide
        """
        if not guide.is_guide:
            logger.warning(
                "Tour creation refused - caller is not a guide",
                extra={"user_id": guide.user_id, "user_type": guide.user_type.value}
            )
            raise AuthorizationError("Only guides can create tours")

        tour = Tour(
            guide_id=guide.user_id,
            title=request.title,
            description=request.description,
            base_price=request.base_price,
            max_people=request.max_people,
            extra_person_price=request.extra_person_price,
            location=request.location,
            duration=request.duration,
            image_url=request.image_url,
        )

        self.db.add(tour)
        await self.db.commit()
        await self.db.refresh(tour)

        logger.info(
            "Tour created successfully",
            extra={
                "tour_id": tour.id,
                "guide_id": guide.user_id,
                "title": tour.title
            }
        )

        return await self.get_tour_by_id_or_raise(tour.id)

    async def list_tours(self) -> list[Tour]:
        """Return every tour with its guide, newest first."""
        stmt = (
            select(Tour)
            .options(selectinload(Tour.guide))
            .order_by(Tour.created_at.desc(), Tour.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_tours_by_guide(self, guide_id: int) -> list[Tour]:
        stmt = (
            select(Tour)
            .options(selectinload(Tour.guide))
            .where(Tour.guide_id == guide_id)
            .order_by(Tour.created_at.desc(), Tour.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_tour_by_id(self, tour_id: int) -> Optional[Tour]:
        """
        Get tour by ID.

        Args:
            tour_id: Tour ID to search for

        Returns:
            Tour if found, None otherwise
        """
        stmt = (
            select(Tour)
            .options(selectinload(Tour.guide))
            .where(Tour.id == tour_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_tour_by_id_or_raise(self, tour_id: int) -> Tour:
        """
        Get tour by ID or raise NotFoundError.

        Raises:
            NotFoundError: If tour not found
        """
        tour = await self.get_tour_by_id(tour_id)
        if not tour:
            logger.warning(
                "Tour not found",
                extra={"tour_id": tour_id}
            )
            raise NotFoundError(resource_type="tour", resource_id=tour_id)
        return tour

    async def get_tour_detail(self, tour_id: int) -> TourDetail:
        """Tour with guide name and review summary."""
        tour = await self.get_tour_by_id_or_raise(tour_id)
        average, count = await self.tour_rating_summary(tour_id)

        return TourDetail(
            **tour_to_schema(tour).model_dump(),
            average_rating=average,
            review_count=count,
        )

    async def tour_rating_summary(self, tour_id: int) -> tuple[float, int]:
        """Average rating and review count for a tour (0, 0 when unreviewed)."""
        stmt = select(func.avg(TourReview.rating), func.count(TourReview.id)).where(
            TourReview.tour_id == tour_id
        )
        average, count = (await self.db.execute(stmt)).one()
        return round(float(average or 0), 2), count
