"""Common Pydantic schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

__all__ = ["MessageResponse", "Envelope", "AverageRatingResponse"]


class MessageResponse(BaseModel):
    """Acknowledgement without a payload."""

    message: str = Field(..., description="Outcome of the operation")


class Envelope(BaseModel, Generic[T]):
    """Wrapper for created, updated and deleted resources."""

    message: str = Field(..., description="Outcome of the operation")
    data: T = Field(..., description="Affected resource")


class AverageRatingResponse(BaseModel):
    """Average review score for a tour or guide."""

    average_rating: float = Field(..., ge=0, le=5, description="Mean rating, 0 when unreviewed")
    review_count: int = Field(0, ge=0, description="Number of reviews")
