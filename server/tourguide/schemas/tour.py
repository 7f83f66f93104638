"""Tour-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["CreateTourRequest", "Tour", "TourDetail"]


class CreateTourRequest(BaseModel):
    """Request schema for creating a tour."""

    title: str = Field(..., min_length=1, max_length=200, description="Tour title")
    description: str = Field(..., min_length=1, description="Tour description")
    base_price: float = Field(..., ge=0, description="Price for up to max_people")
    max_people: int = Field(..., ge=1, description="People covered by the base price")
    extra_person_price: float = Field(0, ge=0, description="Price per person beyond max_people")
    location: str = Field(..., min_length=1, max_length=200, description="Meeting point or region")
    duration: str = Field(..., min_length=1, max_length=50, description="Human-readable duration")
    image_url: str | None = Field(None, max_length=500, description="Cover image URL")


class Tour(BaseModel):
    """Tour response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique tour ID")
    title: str
    description: str
    guide_id: int
    guide_name: str | None = Field(None, description="Name of the owning guide")
    base_price: float
    max_people: int
    extra_person_price: float
    location: str
    duration: str
    image_url: str | None = None
    rating: float
    is_active: bool
    created_at: datetime


class TourDetail(Tour):
    """Tour with its review summary."""

    average_rating: float = Field(0, description="Mean review rating, 0 when unreviewed")
    review_count: int = Field(0, description="Number of reviews")
