"""Pydantic models for the raw image table dump."""

from pydantic import BaseModel, Field, StrictBool, StrictInt


class DebugImageRow(BaseModel):
    filename: str
    original_name: str | None = None
    size: int | None = None
    content_length: int | None = Field(
        None, description="Length of the inline content; null for filesystem storage"
    )
    uploaded_at: str | None = None


class DebugImagesResponse(BaseModel):
    success: StrictBool = True
    count: StrictInt
    images: list[DebugImageRow]
