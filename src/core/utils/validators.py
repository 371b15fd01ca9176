"""Request validation utilities."""

from pathlib import PurePosixPath
from typing import Any, TypeVar

from pydantic import BaseModel

from core.utils.constants import (
    SVG_CLOSE_TAG,
    SVG_EXTENSION,
    SVG_MIME_TYPE,
    SVG_OPEN_TAG,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    - internal exception details
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        msg = raw_msg.replace("Value error,", "").strip()

        msg_lower = msg.lower()
        if "field required" in msg_lower:
            msg = "This field is required"
        elif "valid string" in msg_lower:
            msg = "Invalid value type"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Raises:
        pydantic.ValidationError: If the data does not fit the model
    """
    return model(**data)


def normalize_filename(name: str | None) -> str:
    """Reduce a client-supplied file name to its basename.

    Both ``/`` and ``\\`` count as separators, so ``C:\\tmp\\a.svg`` and
    ``../../a.svg`` both become ``a.svg``.
    """
    if not name:
        return ""
    return PurePosixPath(name.replace("\\", "/")).name.strip()


def is_svg_upload(filename: str | None, content_type: str | None) -> bool:
    """Accept a part declared as SVG by MIME type or by extension."""
    if content_type and content_type.split(";")[0].strip().lower() == SVG_MIME_TYPE:
        return True
    return bool(filename) and filename.lower().endswith(SVG_EXTENSION)


def looks_like_svg(text: str) -> bool:
    """Crude markup check: an opening and a closing svg tag."""
    return SVG_OPEN_TAG in text and SVG_CLOSE_TAG in text
