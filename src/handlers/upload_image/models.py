"""Pydantic models for image upload response."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from core.utils.constants import MSG_UPLOAD_OK


class UploadedImageData(BaseModel):
    """Description of the stored upload."""

    model_config = ConfigDict(populate_by_name=True)

    filename: StrictStr = Field(..., description="Storage key")
    original_name: StrictStr = Field(..., alias="originalName")
    size: StrictInt = Field(..., ge=0, description="Image size in bytes")
    url: StrictStr = Field(..., description="Public URL of the image")
    direct_url: StrictStr = Field(..., alias="directUrl")


class ImageUploadResponse(BaseModel):
    """Response model for successful image upload."""

    success: StrictBool = True
    message: StrictStr = MSG_UPLOAD_OK
    data: UploadedImageData
