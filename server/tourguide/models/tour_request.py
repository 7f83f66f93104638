"""Tour request model definition."""

from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base

if TYPE_CHECKING:
    from .tour import Tour
    from .user import User


class TourRequestStatus(str, Enum):
    """Tour request status enumeration."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not TourRequestStatus.PENDING


class TourRequest(Base):
    """Booking intent submitted by a tourist against a guide's tour."""

    __tablename__ = "tour_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    tour_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tours.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    tourist_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Request details
    request_date: Mapped[date] = mapped_column(Date, nullable=False)
    people_count: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[TourRequestStatus] = mapped_column(
        String(20),
        nullable=False,
        default=TourRequestStatus.PENDING,
        index=True
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

    # Constraints
    __table_args__ = (
        CheckConstraint("people_count > 0", name="ck_tour_request_people_count_positive"),
        CheckConstraint("total_price >= 0", name="ck_tour_request_total_price_non_negative"),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'cancelled')",
            name="ck_tour_request_status_valid"
        ),
    )

    # Relationships
    tour: Mapped["Tour"] = relationship("Tour", back_populates="requests")
    tourist: Mapped["User"] = relationship("User", back_populates="tour_requests")

    def __repr__(self) -> str:
        return (
            f"<TourRequest(id={self.id}, tour_id={self.tour_id}, "
            f"tourist_id={self.tourist_id}, status={self.status})>"
        )
