from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
)

from core.models.image import ImageView


class GetImageRequest(BaseModel):
    """Validation model for get image request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    filename: StrictStr = Field(
        ...,
        min_length=1,
        description="Filename of the image to describe",
    )

    @field_validator("filename")
    @classmethod
    def validate_filename_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("filename must not be blank")
        return value


class GetImageResponse(BaseModel):
    """Image description wrapped in the success envelope."""

    success: StrictBool = True
    data: ImageView
