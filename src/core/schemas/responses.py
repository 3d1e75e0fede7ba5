"""Shared response schemas for API endpoints."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard API error response."""

    success: bool = False
    error: str
    details: dict | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "OK"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
