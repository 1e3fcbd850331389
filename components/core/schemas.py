"""Core schemas for the application."""

from datetime import datetime

from pydantic import BaseModel


class HealthCheck(BaseModel):
    """Schema for health check response."""
    service_name: str
    status: str
    time: datetime
