"""Pydantic models for the service description."""

from pydantic import BaseModel, Field

from core.utils.constants import SERVICE_NAME, SERVICE_VERSION

ENDPOINTS: dict[str, str] = {
    "health": "GET /health - Database health check",
    "upload": "POST /upload - Upload SVG file",
    "list": "GET /images/list - List all images",
    "info": "GET /api/images/{filename} - Get image info",
    "direct": "GET /images/{filename} - Direct image URL",
    "delete": "DELETE /images/{filename} - Delete image",
}


class ServiceInfoResponse(BaseModel):
    """What this API is and which routes it offers."""

    message: str = SERVICE_NAME
    version: str = SERVICE_VERSION
    storage: str = Field(..., description="Configured storage backend")
    endpoints: dict[str, str] = Field(default_factory=lambda: dict(ENDPOINTS))
