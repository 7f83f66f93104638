"""Tour review router."""

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
from ..schemas.review import CreateTourReviewRequest, TourReview, UpdateTourReviewRequest
from ..services.review_service import ReviewService, tour_review_to_schema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tour-reviews", tags=["tour-reviews"])

DB_DEPENDENCY = Depends(get_db)


def _storage_failure(action: str, error: SQLAlchemyError, **context) -> InternalServerError:
    logger.error(f"Database error {action}", extra={**context, "error": str(error)}, exc_info=True)
    return InternalServerError(str(error))


@router.post("", response_model=Envelope[TourReview], status_code=201)
async def create_tour_review(
    request: CreateTourReviewRequest,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Review a tour; each tourist may review a tour once."""
    try:
        review = await ReviewService(db).create_tour_review(request, current_user)
    except SQLAlchemyError as e:
        raise _storage_failure("creating tour review", e, tour_id=request.tour_id)

    response_data = Envelope[TourReview](
        message="Review created successfully",
        data=tour_review_to_schema(review),
    )
    return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))


@router.get("/my-reviews", response_model=list[TourReview])
async def my_reviews(
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> list[TourReview]:
    try:
        reviews = await ReviewService(db).list_reviews_by_tourist(current_user.user_id)
    except SQLAlchemyError as e:
        raise _storage_failure("listing own reviews", e, tourist_id=current_user.user_id)
    return [tour_review_to_schema(review) for review in reviews]


@router.get("/tour/{tour_id}", response_model=list[TourReview])
async def tour_reviews(tour_id: int, db: AsyncSession = DB_DEPENDENCY) -> list[TourReview]:
    """Reviews of a tour with reviewer names, newest first."""
    try:
        reviews = await ReviewService(db).list_tour_reviews(tour_id)
    except SQLAlchemyError as e:
        raise _storage_failure("listing tour reviews", e, tour_id=tour_id)
    return [tour_review_to_schema(review) for review in reviews]


@router.get("/tour/{tour_id}/average", response_model=AverageRatingResponse)
async def tour_average_rating(tour_id: int, db: AsyncSession = DB_DEPENDENCY) -> AverageRatingResponse:
    try:
        average, count = await ReviewService(db).tour_rating_summary(tour_id)
    except SQLAlchemyError as e:
        raise _storage_failure("averaging tour reviews", e, tour_id=tour_id)
    return AverageRatingResponse(average_rating=average, review_count=count)


@router.put("/{review_id}", response_model=Envelope[TourReview])
async def update_tour_review(
    review_id: int,
    request: UpdateTourReviewRequest,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Edit one of the caller's reviews."""
    try:
        review = await ReviewService(db).update_tour_review(review_id, request, current_user)
    except SQLAlchemyError as e:
        raise _storage_failure("updating tour review", e, review_id=review_id)

    response_data = Envelope[TourReview](
        message="Review updated successfully",
        data=tour_review_to_schema(review),
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.delete("/{review_id}", response_model=Envelope[TourReview])
async def delete_tour_review(
    review_id: int,
    db: AsyncSession = DB_DEPENDENCY,
    current_user: AuthenticatedUser = CURRENT_USER_DEPENDENCY,
) -> JSONResponse:
    """Delete one of the caller's reviews."""
    try:
        deleted = await ReviewService(db).delete_tour_review(review_id, current_user)
    except SQLAlchemyError as e:
        raise _storage_failure("deleting tour review", e, review_id=review_id)

    response_data = Envelope[TourReview](message="Review deleted successfully", data=deleted)
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
