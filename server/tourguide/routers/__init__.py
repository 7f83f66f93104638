"""FastAPI routers package."""

from .auth import router as auth_router
from .business import router as business_router
from .guide_review import router as guide_review_router
from .health import router as health_router
from .metrics import router as metrics_router
from .notification import router as notification_router
from .tour import router as tour_router
from .tour_request import router as tour_request_router
from .tour_review import router as tour_review_router

__all__ = [
    "auth_router",
    "business_router",
    "guide_review_router",
    "health_router",
    "metrics_router",
    "notification_router",
    "tour_router",
    "tour_request_router",
    "tour_review_router",
]
