"""User model definition."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base

if TYPE_CHECKING:
    from .tour import Tour
    from .tour_request import TourRequest


class UserType(str, Enum):
    """User type enumeration."""
    TOURIST = "tourist"
    GUIDE = "guide"


class User(Base):
    """User entity for both tourists and guides."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    user_type: Mapped[UserType] = mapped_column(String(20), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

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
        CheckConstraint("user_type IN ('tourist', 'guide')", name="ck_user_type_valid"),
    )

    # Relationships
    tours: Mapped[list["Tour"]] = relationship(
        "Tour",
        back_populates="guide",
        cascade="all, delete-orphan"
    )
    tour_requests: Mapped[list["TourRequest"]] = relationship(
        "TourRequest",
        back_populates="tourist",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', user_type={self.user_type})>"
