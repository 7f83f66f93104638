"""Review Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt

__all__ = [
    "CreateTourReviewRequest",
    "UpdateTourReviewRequest",
    "CreateGuideReviewRequest",
    "TourReview",
    "GuideReview",
]

# Integers only: 4.5 and "4" are rejected
Rating = StrictInt


class CreateTourReviewRequest(BaseModel):
    """Request schema for reviewing a tour."""

    tour_id: int = Field(..., description="Reviewed tour")
    rating: Rating = Field(..., ge=1, le=5, description="Score from 1 to 5")
    comment: str | None = Field(None, max_length=2000)


class UpdateTourReviewRequest(BaseModel):
    """Request schema for editing one's tour review."""

    rating: Rating = Field(..., ge=1, le=5, description="Score from 1 to 5")
    comment: str | None = Field(None, max_length=2000)


class CreateGuideReviewRequest(BaseModel):
    """Request schema for reviewing a guide."""

    guide_id: int = Field(..., description="Reviewed guide")
    rating: Rating = Field(..., ge=1, le=5, description="Score from 1 to 5")
    comment: str | None = Field(None, max_length=2000)


class TourReview(BaseModel):
    """Tour review response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    tour_id: int
    tourist_id: int
    rating: int
    comment: str | None = None
    created_at: datetime
    tourist_name: str | None = None
    tour_title: str | None = None


class GuideReview(BaseModel):
    """Guide review response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    guide_id: int
    tourist_id: int
    rating: int
    comment: str | None = None
    created_at: datetime
    tourist_name: str | None = None
