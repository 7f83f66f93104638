"""Tour model definition."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import expression

from ..core.database import Base

if TYPE_CHECKING:
    from .tour_request import TourRequest
    from .user import User


class Tour(Base):
    """Tour entity representing a guide's offering."""

    __tablename__ = "tours"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    guide_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Tour information
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    duration: Mapped[str] = mapped_column(String(50), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Pricing
    base_price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    max_people: Mapped[int] = mapped_column(Integer, nullable=False)
    extra_person_price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
        default=0
    )

    rating: Mapped[float] = mapped_column(Numeric(3, 2, asdecimal=False), nullable=False, default=5.0)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=expression.true()
    )

    # Timestamps
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
        CheckConstraint("base_price >= 0", name="ck_tour_base_price_non_negative"),
        CheckConstraint("max_people > 0", name="ck_tour_max_people_positive"),
        CheckConstraint("extra_person_price >= 0", name="ck_tour_extra_person_price_non_negative"),
    )

    # Relationships
    guide: Mapped["User"] = relationship("User", back_populates="tours")
    requests: Mapped[list["TourRequest"]] = relationship(
        "TourRequest",
        back_populates="tour",
        cascade="all, delete-orphan"
    )

    def quote(self, people_count: int) -> float:
        """Total price for a party: base price plus each person beyond ``max_people``."""
        extra_people = max(0, people_count - self.max_people)
        return round(self.base_price + extra_people * (self.extra_person_price or 0), 2)

    def __repr__(self) -> str:
        return f"<Tour(id={self.id}, title='{self.title}', guide_id={self.guide_id})>"
