"""Helpers for reading API Gateway proxy events."""

import base64
import binascii
import os
from typing import Any
from urllib.parse import quote, unquote

from core.models.errors import InvalidFileError
from core.utils.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_SCHEME,
    ENV_HOST,
    ENV_PORT,
    IMAGE_ROUTE_PREFIX,
)


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Case-insensitive header lookup."""
    headers = event.get("headers") or {}
    wanted = name.lower()

    for key, value in headers.items():
        if key.lower() == wanted:
            return value

    return None


def get_path_parameter(event: dict[str, Any], name: str) -> str | None:
    """URL-decoded path parameter, or None when absent."""
    value = (event.get("pathParameters") or {}).get(name)
    return unquote(value) if value is not None else None


def get_body_bytes(event: dict[str, Any]) -> bytes:
    """Raw request body, decoding API Gateway's base64 wrapping when present.

    Raises:
        InvalidFileError: If a body flagged as base64 does not decode
    """
    body = event.get("body")
    if body is None:
        return b""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except binascii.Error as exc:
            raise InvalidFileError(details={"reason": "Invalid base64 request body"}) from exc

    if isinstance(body, bytes):
        return body

    return body.encode("utf-8")


def base_url(event: dict[str, Any]) -> str:
    """Scheme and host the client used to reach the API.

    Falls back to ``http://HOST:PORT`` when the request carries no Host header.
    """
    host = get_header(event, "Host")
    if host:
        scheme = get_header(event, "X-Forwarded-Proto") or DEFAULT_SCHEME
        return f"{scheme.split(',')[0].strip()}://{host}"

    host = os.getenv(ENV_HOST) or DEFAULT_HOST
    port = os.getenv(ENV_PORT) or DEFAULT_PORT
    return f"http://{host}:{port}"


def build_image_url(base: str, filename: str) -> str:
    """Public URL that serves ``filename`` under ``base``."""
    return f"{base}{IMAGE_ROUTE_PREFIX}/{quote(filename)}"


def image_url(event: dict[str, Any], filename: str) -> str:
    return build_image_url(base_url(event), filename)


def request_log_context(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Structured fields logged when a handler receives a request."""
    return {
        "http_method": event.get("httpMethod"),
        "path": event.get("path"),
        "path_params": event.get("pathParameters"),
        "request_id": getattr(context, "aws_request_id", None),
        "function_name": getattr(context, "function_name", None),
        "remaining_time_ms": context.get_remaining_time_in_millis()
        if hasattr(context, "get_remaining_time_in_millis")
        else None,
    }
