import base64
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

API_HOST = "api.example.com"


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def api_event() -> Callable[..., dict[str, Any]]:
    """
    Helper to build an API Gateway proxy event.

    Usage:
        event = api_event("GET", "/images/a.svg", path_params={"filename": "a.svg"})
    """

    def _build(
        method: str,
        path: str,
        *,
        path_params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> dict[str, Any]:
        event: dict[str, Any] = {
            "httpMethod": method,
            "path": path,
            "pathParameters": path_params,
            "queryStringParameters": None,
            "headers": {"Host": API_HOST, "X-Forwarded-Proto": "https", **(headers or {})},
            "body": None,
            "isBase64Encoded": False,
        }

        if body is not None:
            event["body"] = base64.b64encode(body).decode("utf-8")
            event["isBase64Encoded"] = True

        return event

    return _build


@pytest.fixture
def upload_event(api_event, multipart_body, sample_svg) -> Callable[..., dict[str, Any]]:
    """
    Helper to build a ``POST /upload`` event carrying one file part.

    Usage:
        event = upload_event(filename="logo.svg", content=svg_bytes)
    """

    def _build(
        *,
        filename: str = "a.svg",
        content: bytes | None = None,
        content_type: str | None = "image/svg+xml",
        field_name: str = "image",
    ) -> dict[str, Any]:
        body, multipart_type = multipart_body(
            files=[(field_name, filename, sample_svg if content is None else content, content_type)],
        )
        return api_event("POST", "/upload", headers={"Content-Type": multipart_type}, body=body)

    return _build
