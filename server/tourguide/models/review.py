"""Tour and guide review model definitions."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base

if TYPE_CHECKING:
    from .tour import Tour
    from .user import User


class TourReview(Base):
    """A tourist's rating of a tour."""

    __tablename__ = "tour_reviews"

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

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

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
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_tour_review_rating_range"),
        UniqueConstraint("tour_id", "tourist_id", name="uq_tour_review_tour_tourist"),
    )

    tour: Mapped["Tour"] = relationship("Tour")
    tourist: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        return f"<TourReview(id={self.id}, tour_id={self.tour_id}, rating={self.rating})>"


class GuideReview(Base):
    """A tourist's rating of a guide."""

    __tablename__ = "guide_reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    guide_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    tourist_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_guide_review_rating_range"),
        UniqueConstraint("guide_id", "tourist_id", name="uq_guide_review_guide_tourist"),
    )

    guide: Mapped["User"] = relationship("User", foreign_keys=[guide_id])
    tourist: Mapped["User"] = relationship("User", foreign_keys=[tourist_id])

    def __repr__(self) -> str:
        return f"<GuideReview(id={self.id}, guide_id={self.guide_id}, rating={self.rating})>"
