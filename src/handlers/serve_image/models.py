from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ServeImageRequest(BaseModel):
    """Validation model for raw image requests."""

    model_config = ConfigDict(str_strip_whitespace=True)

    filename: StrictStr = Field(
        ...,
        min_length=1,
        description="Filename of the image to serve",
    )
