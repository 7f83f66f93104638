"""Guide review router."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import CURRENT_USER_DEPENDENCY
from ..core.exceptions import InternalServerError
from ..schemas.auth import AuthenticatedUser
from ..schemas.common import AverageRatingResponse, Envelope
from ..schemas.review import CreateGuideReviewRequest, GuideReview
from ..services.review_service import ReviewService, guide_review_to_schema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/guide-reviews", tags=["guide-reviews"])

DB_DEPENDENCY = Depends(get_db)


@router.post("", response_model=Envelope[GuideReview], status_code=201)
async def create_guide_review(
    request: CreateGuideReviewRequest,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Review a guide; each tourist may review a guide once."""
    try:
        review = await ReviewService(db).create_guide_review(request, current_user)
    except SQLAlchemyError as e:
        logger.error(
            "Database error creating guide review",
            extra={"guide_id": request.guide_id, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(str(e))

    response_data = Envelope[GuideReview](
        message="Review created successfully",
        data=guide_review_to_schema(review),
    )
    return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))


@router.get("/guide/{guide_id}", response_model=list[GuideReview])
async def guide_reviews(guide_id: int, db: AsyncSession = DB_DEPENDENCY) -> list[GuideReview]:
    try:
        reviews = await ReviewService(db).list_guide_reviews(guide_id)
    except SQLAlchemyError as e:
        logger.error("Database error listing guide reviews", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))
    return [guide_review_to_schema(review) for review in reviews]


@router.get("/guide/{guide_id}/average", response_model=AverageRatingResponse)
async def guide_average_rating(guide_id: int, db: AsyncSession = DB_DEPENDENCY) -> AverageRatingResponse:
    try:
        average, count = await ReviewService(db).guide_rating_summary(guide_id)
    except SQLAlchemyError as e:
        logger.error("Database error averaging guide reviews", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(str(e))
    return AverageRatingResponse(average_rating=average, review_count=count)
