"""Review service for tour and guide reviews."""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.exceptions import AlreadyReviewedError, NotFoundError
from ..core.observability import metrics_collector
from ..models.review import GuideReview, TourReview
from ..models.user import User, UserType
from ..schemas.auth import AuthenticatedUser
from ..schemas.review import (
    CreateGuideReviewRequest,
    CreateTourReviewRequest,
    UpdateTourReviewRequest,
)
from ..schemas.review import GuideReview as GuideReviewSchema
from ..schemas.review import TourReview as TourReviewSchema
from .tour_service import TourService

logger = logging.getLogger(__name__)


def tour_review_to_schema(review: TourReview) -> TourReviewSchema:
    data = TourReviewSchema.model_validate(review)
    return data.model_copy(update={
        "tourist_name": review.tourist.name if review.tourist else None,
        "tour_title": review.tour.title if review.tour else None,
    })


def guide_review_to_schema(review: GuideReview) -> GuideReviewSchema:
    data = GuideReviewSchema.model_validate(review)
    return data.model_copy(update={
        "tourist_name": review.tourist.name if review.tourist else None,
    })


class ReviewService:
    """
    Service for tour and guide reviews.

    A tourist reviews each tour and each guide at most once. The lookup
    before insert gives a friendly error for repeated submissions; the
    unique constraints on (target, tourist) settle concurrent ones.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tour_service = TourService(db)

    # Tour reviews

    def _tour_reviews_query(self):
        return (
            select(TourReview)
            .options(selectinload(TourReview.tour), selectinload(TourReview.tourist))
            .execution_options(populate_existing=True)
        )

    async def get_tour_review(self, review_id: int) -> Optional[TourReview]:
        stmt = self._tour_reviews_query().where(TourReview.id == review_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _tour_review_exists(self, tour_id: int, tourist_id: int) -> bool:
        stmt = select(TourReview.id).where(
            TourReview.tour_id == tour_id,
            TourReview.tourist_id == tourist_id,
        )
        return (await self.db.execute(stmt)).first() is not None

    async def create_tour_review(
        self,
        request: CreateTourReviewRequest,
        tourist: AuthenticatedUser
    ) -> TourReview:
        """
        Record a tourist's review of a tour.

        Raises:
            NotFoundError: If the tour does not exist
            AlreadyReviewedError: If the tourist already reviewed this tour
        """
        await self.tour_service.get_tour_by_id_or_raise(request.tour_id)

        if await self._tour_review_exists(request.tour_id, tourist.user_id):
            logger.info(
                "Duplicate tour review refused",
                extra={"tour_id": request.tour_id, "tourist_id": tourist.user_id}
            )
            raise AlreadyReviewedError("tour", request.tour_id, tourist.user_id)

        review = TourReview(
            tour_id=request.tour_id,
            tourist_id=tourist.user_id,
            rating=request.rating,
            comment=request.comment,
        )
        try:
            self.db.add(review)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(
                "Concurrent duplicate tour review refused by constraint",
                extra={"tour_id": request.tour_id, "tourist_id": tourist.user_id}
            )
            raise AlreadyReviewedError("tour", request.tour_id, tourist.user_id)

        metrics_collector.record_review_created("tour")
        logger.info(
            "Tour review created",
            extra={"review_id": review.id, "tour_id": request.tour_id, "rating": request.rating}
        )
        return await self.get_tour_review(review.id)

    async def list_tour_reviews(self, tour_id: int) -> list[TourReview]:
        stmt = (
            self._tour_reviews_query()
            .where(TourReview.tour_id == tour_id)
            .order_by(TourReview.created_at.desc(), TourReview.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_reviews_by_tourist(self, tourist_id: int) -> list[TourReview]:
        stmt = (
            self._tour_reviews_query()
            .where(TourReview.tourist_id == tourist_id)
            .order_by(TourReview.created_at.desc(), TourReview.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _get_own_tour_review(self, review_id: int, tourist: AuthenticatedUser) -> TourReview:
        review = await self.get_tour_review(review_id)
        if not review or review.tourist_id != tourist.user_id:
            raise NotFoundError(resource_type="review", resource_id=review_id)
        return review

    async def update_tour_review(
        self,
        review_id: int,
        request: UpdateTourReviewRequest,
        tourist: AuthenticatedUser
    ) -> TourReview:
        """
        Change the rating and comment of the caller's own review.

        Raises:
            NotFoundError: If the review does not exist or belongs to someone else
        """
        review = await self._get_own_tour_review(review_id, tourist)
        review.rating = request.rating
        review.comment = request.comment
        await self.db.commit()

        logger.info("Tour review updated", extra={"review_id": review_id, "rating": request.rating})
        return await self.get_tour_review(review_id)

    async def delete_tour_review(self, review_id: int, tourist: AuthenticatedUser) -> TourReviewSchema:
        """Delete the caller's own review and return what was removed."""
        review = await self._get_own_tour_review(review_id, tourist)
        deleted = tour_review_to_schema(review)

        await self.db.delete(review)
        await self.db.commit()

        logger.info("Tour review deleted", extra={"review_id": review_id})
        return deleted

    async def tour_rating_summary(self, tour_id: int) -> tuple[float, int]:
        """Average rating and review count for a tour (0, 0 when unreviewed)."""
        return await self.tour_service.tour_rating_summary(tour_id)

    # Guide reviews

    def _guide_reviews_query(self):
        return (
            select(GuideReview)
            .options(selectinload(GuideReview.tourist))
            .execution_options(populate_existing=True)
        )

    async def _guide_review_exists(self, guide_id: int, tourist_id: int) -> bool:
        stmt = select(GuideReview.id).where(
            GuideReview.guide_id == guide_id,
            GuideReview.tourist_id == tourist_id,
        )
        return (await self.db.execute(stmt)).first() is not None

    async def create_guide_review(
        self,
        request: CreateGuideReviewRequest,
        tourist: AuthenticatedUser
    ) -> GuideReview:
        """
        Record a tourist's review of a guide.

        Raises:
            NotFoundError: If no guide has this id
            AlreadyReviewedError: If the tourist already reviewed this guide
        """
        guide = (
            await self.db.execute(select(User).where(User.id == request.guide_id))
        ).scalar_one_or_none()
        if not guide or UserType(guide.user_type) is not UserType.GUIDE:
            raise NotFoundError(resource_type="guide", resource_id=request.guide_id)

        if await self._guide_review_exists(request.guide_id, tourist.user_id):
            logger.info(
                "Duplicate guide review refused",
                extra={"guide_id": request.guide_id, "tourist_id": tourist.user_id}
            )
            raise AlreadyReviewedError("guide", request.guide_id, tourist.user_id)

        review = GuideReview(
            guide_id=request.guide_id,
            tourist_id=tourist.user_id,
            rating=request.rating,
            comment=request.comment,
        )
        try:
            self.db.add(review)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise AlreadyReviewedError("guide", request.guide_id, tourist.user_id)

        metrics_collector.record_review_created("guide")
        logger.info(
            "Guide review created",
            extra={"review_id": review.id, "guide_id": request.guide_id, "rating": request.rating}
        )

        stmt = self._guide_reviews_query().where(GuideReview.id == review.id)
        return (await self.db.execute(stmt)).scalar_one()

    async def list_guide_reviews(self, guide_id: int) -> list[GuideReview]:
        stmt = (
            self._guide_reviews_query()
            .where(GuideReview.guide_id == guide_id)
            .order_by(GuideReview.created_at.desc(), GuideReview.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def guide_rating_summary(self, guide_id: int) -> tuple[float, int]:
        """Average rating and review count for a guide (0, 0 when unreviewed)."""
        stmt = select(func.avg(GuideReview.rating), func.count(GuideReview.id)).where(
            GuideReview.guide_id == guide_id
        )
        average, count = (await self.db.execute(stmt)).one()
        return round(float(average or 0), 2), count
