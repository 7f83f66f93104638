"""Models module exporting all database models."""

from .business import Business, BusinessType
from .notification import Notification, NotificationType
from .review import GuideReview, TourReview
from .tour import Tour
from .tour_request import TourRequest, TourRequestStatus
from .user import User, UserType

__all__ = [
    # Accounts
    "User",
    "UserType",

    # Tours and bookings
    "Tour",
    "TourRequest",
    "TourRequestStatus",

    # Reviews
    "TourReview",
    "GuideReview",

    # Inbox
    "Notification",
    "NotificationType",

    # Directory
    "Business",
    "BusinessType",
]
