"""Notification Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["Notification", "UnreadCountResponse"]


class Notification(BaseModel):
    """Notification response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    message: str
    type: str
    is_read: bool
    related_id: int | None = None
    related_type: str | None = None
    created_at: datetime


class UnreadCountResponse(BaseModel):
    """Number of unread notifications in the caller's inbox."""

    unread_count: int = Field(..., ge=0)
