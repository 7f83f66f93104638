"""Business directory Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.business import BusinessType

__all__ = ["CreateBusinessRequest", "UpdateBusinessRequest", "BusinessFilters", "Business"]


class CreateBusinessRequest(BaseModel):
    """Request schema for adding a directory entry."""

    name: str = Field(..., min_length=1, max_length=200)
    type: BusinessType = Field(..., description="restaurant, store, hotel or attraction")
    description: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    phone: str | None = Field(None, max_length=20)
    website: str | None = Field(None, max_length=500)
    image_url: str | None = Field(None, max_length=500)
    rating: float = Field(5.0, ge=0, le=5)
    is_verified: bool = False


class UpdateBusinessRequest(BaseModel):
    """Partial update; only fields present in the body are changed."""

    name: str | None = Field(None, min_length=1, max_length=200)
    type: BusinessType | None = None
    description: str | None = Field(None, min_length=1)
    address: str | None = Field(None, min_length=1)
    phone: str | None = Field(None, max_length=20)
    website: str | None = Field(None, max_length=500)
    image_url: str | None = Field(None, max_length=500)
    rating: float | None = Field(None, ge=0, le=5)
    is_verified: bool | None = None

    @field_validator("name", "type", "description", "address", "rating", "is_verified")
    @classmethod
    def reject_null(cls, v):
        """Required columns may be omitted but not cleared."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class BusinessFilters(BaseModel):
    """Directory query; every given filter must match."""

    type: BusinessType | None = None
    verified: bool | None = None
    min_rating: float | None = Field(None, ge=0, le=5)
    search: str | None = Field(None, description="Case-insensitive match on name, description or address")


class Business(BaseModel):
    """Business response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: BusinessType
    description: str
    address: str
    phone: str | None = None
    website: str | None = None
    image_url: str | None = None
    rating: float
    is_verified: bool
