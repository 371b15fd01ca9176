"""Pydantic models for delete image request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from core.utils.constants import MSG_DELETE_OK


class DeleteImageRequest(BaseModel):
    """Validation model for delete image request."""

    model_config = ConfigDict(str_strip_whitespace=True)
    filename: str = Field(
        ...,
        min_length=1,
        description="Filename of the image to delete",
    )


class DeleteImageResponse(BaseModel):
    """Response model for successful image deletion."""

    success: StrictBool = True
    message: str = Field(MSG_DELETE_OK, description="Success message")
