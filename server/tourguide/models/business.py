"""Business directory model definition."""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import expression

from ..core.database import Base


class BusinessType(str, Enum):
    """Business type enumeration."""
    RESTAURANT = "restaurant"
    STORE = "store"
    HOTEL = "hotel"
    ATTRACTION = "attraction"


class Business(Base):
    """Standalone directory listing for a local business."""

    __tablename__ = "businesses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    type: Mapped[BusinessType] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    rating: Mapped[float] = mapped_column(Numeric(3, 2, asdecimal=False), nullable=False, default=5.0)
    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false()
    )

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint(
            "type IN ('restaurant', 'store', 'hotel', 'attraction')",
            name="ck_business_type_valid"
        ),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_business_rating_range"),
    )

    def __repr__(self) -> str:
        return f"<Business(id={self.id}, name='{self.name}', type={self.type})>"
