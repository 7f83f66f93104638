"""Tour request Pydantic schemas."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..models.tour_request import TourRequestStatus

__all__ = ["CreateTourRequestRequest", "UpdateTourRequestStatusRequest", "TourRequest"]

MAX_PEOPLE_PER_REQUEST = 20


class CreateTourRequestRequest(BaseModel):
    """Request schema for booking a tour."""

    tour_id: int = Field(..., description="Tour to book")
    request_date: date = Field(..., description="Desired tour date")
    people_count: int = Field(..., ge=1, le=MAX_PEOPLE_PER_REQUEST, description="Party size")
    total_price: float | None = Field(
        None,
        ge=0,
        description="Agreed total; quoted from the tour's pricing when omitted"
    )
    special_requests: str | None = Field(None, max_length=2000, description="Notes for the guide")


class UpdateTourRequestStatusRequest(BaseModel):
    """Request schema for a guide's decision."""

    status: Literal["approved", "rejected"] = Field(
        ...,
        description="approved or rejected"
    )


class TourRequest(BaseModel):
    """Tour request response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    tour_id: int
    tourist_id: int
    request_date: date
    people_count: int
    total_price: float
    status: TourRequestStatus
    special_requests: str | None = None
    created_at: datetime
    updated_at: datetime
    tourist_name: str | None = None
    tour_title: str | None = None
    guide_id: int | None = None
