"""Health-related Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

__all__ = ["HealthStatus", "DatabaseStatus", "HealthResponse"]


class HealthStatus(str, Enum):
    """Health status enumeration."""
    OK = "OK"
    ERROR = "ERROR"


class DatabaseStatus(str, Enum):
    """Database connectivity enumeration."""
    CONNECTED = "Connected"
    DISCONNECTED = "Disconnected"


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: HealthStatus = Field(..., description="Service status")
    message: str = Field(..., description="Human-readable status")
    database: DatabaseStatus = Field(..., description="Database connectivity")
    timestamp: datetime = Field(..., description="Current server time (ISO 8601)")
    version: str = Field("1.0.0", description="API version")
