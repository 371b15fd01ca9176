"""Shared image models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from core.utils.constants import SVG_MIME_TYPE
from core.utils.time import to_utc_iso


class ImageRecord(BaseModel):
    """One row of the ``images`` table."""

    filename: StrictStr = Field(..., min_length=1, description="Unique storage key")
    original_name: StrictStr | None = Field(None, description="Client-supplied file name")
    size: StrictInt = Field(..., ge=0, description="Image size in bytes")
    content: StrictStr | None = Field(
        None, description="Inline SVG text (inline storage only)"
    )
    mime_type: StrictStr = Field(SVG_MIME_TYPE, description="MIME type of the image")
    uploaded_at: datetime | None = Field(None, description="Last upload time (UTC)")


class StoredObject(BaseModel):
    """What a storage backend knows about an image without consulting metadata."""

    filename: StrictStr
    size: StrictInt = Field(..., ge=0)
    created_at: StrictStr | None = Field(None, description="ISO-8601 creation timestamp (UTC)")


class ImageContent(BaseModel):
    """Raw image bytes ready to be served."""

    filename: StrictStr
    content: bytes
    mime_type: StrictStr = SVG_MIME_TYPE


class ImageView(BaseModel):
    """Image description returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    filename: StrictStr = Field(..., description="Storage key")
    original_name: StrictStr = Field(..., alias="originalName")
    url: StrictStr = Field(..., description="Public URL of the image")
    direct_url: StrictStr = Field(..., alias="directUrl")
    size: StrictInt = Field(..., description="Image size in bytes")
    uploaded_at: StrictStr | None = Field(None, alias="uploadedAt")

    @classmethod
    def from_sources(
        cls,
        stored: StoredObject,
        record: ImageRecord | None,
        *,
        url: str,
    ) -> "ImageView":
        """Merge what storage and the metadata row know about one image.

        Storage data fills in for a missing row or missing row fields.
        """
        uploaded_at = stored.created_at
        if record is not None and record.uploaded_at is not None:
            uploaded_at = to_utc_iso(record.uploaded_at)

        return cls(
            filename=stored.filename,
            original_name=(record.original_name if record else None) or stored.filename,
            url=url,
            direct_url=url,
            size=record.size if record is not None else stored.size,
            uploaded_at=uploaded_at,
        )


class ListImagesResponse(BaseModel):
    """Response for listing images."""

    success: StrictBool = True
    count: StrictInt = Field(..., description="Number of images returned")
    images: list[ImageView] = Field(..., description="Known images, newest first")
