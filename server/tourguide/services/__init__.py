"""Service layer package."""

from .auth_service import AuthService
from .business_service import BusinessService
from .notification_service import NotificationService
from .review_service import ReviewService
from .tour_request_service import TourRequestService
from .tour_service import TourService

__all__ = [
    "AuthService",
    "BusinessService",
    "NotificationService",
    "ReviewService",
    "TourRequestService",
    "TourService",
]
