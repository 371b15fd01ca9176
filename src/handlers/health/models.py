"""Pydantic models for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Database connectivity report."""

    status: Literal["healthy", "unhealthy"]
    database: Literal["connected", "disconnected"]
    error: str | None = Field(None, description="Why the database check failed")
    timestamp: str = Field(..., description="Check time (ISO-8601 UTC)")

    @property
    def healthy(self) -> bool:
        return self.status == "healthy"
