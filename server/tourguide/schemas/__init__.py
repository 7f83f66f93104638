"""Pydantic schemas for request/response validation."""

from .auth import *  # noqa: F403
from .business import *  # noqa: F403
from .common import *  # noqa: F403
from .health import *  # noqa: F403
from .notification import *  # noqa: F403
from .review import *  # noqa: F403
from .tour import *  # noqa: F403
from .tour_request import *  # noqa: F403
