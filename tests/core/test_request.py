import base64

import pytest

from core.models.errors import InvalidFileError
from core.utils.request import (
    base_url,
    build_image_url,
    get_body_bytes,
    get_header,
    get_path_parameter,
    image_url,
    request_log_context,
)


class TestGetHeader:
    def test_case_insensitive(self) -> None:
        event = {"headers": {"content-TYPE": "image/svg+xml"}}
        assert get_header(event, "Content-Type") == "image/svg+xml"

    def test_missing_headers(self) -> None:
        assert get_header({"headers": None}, "Host") is None
        assert get_header({}, "Host") is None


class TestGetPathParameter:
    def test_url_decoded(self) -> None:
        event = {"pathParameters": {"filename": "my%20logo.svg"}}
        assert get_path_parameter(event, "filename") == "my logo.svg"

    def test_missing(self) -> None:
        assert get_path_parameter({"pathParameters": None}, "filename") is None


class TestGetBodyBytes:
    def test_base64_body(self) -> None:
        event = {"body": base64.b64encode(b"\x00\xffdata").decode(), "isBase64Encoded": True}
        assert get_body_bytes(event) == b"\x00\xffdata"

    def test_plain_body(self) -> None:
        assert get_body_bytes({"body": "<svg></svg>"}) == b"<svg></svg>"

    def test_no_body(self) -> None:
        assert get_body_bytes({"body": None}) == b""

    def test_invalid_base64(self) -> None:
        with pytest.raises(InvalidFileError) as exc_info:
            get_body_bytes({"body": "not base64!!", "isBase64Encoded": True})

        assert exc_info.value.details == {"reason": "Invalid base64 request body"}


class TestUrls:
    def test_host_and_forwarded_proto(self) -> None:
        event = {"headers": {"host": "api.example.com", "x-forwarded-proto": "http"}}
        assert base_url(event) == "http://api.example.com"

    def test_scheme_defaults_to_https(self) -> None:
        assert base_url({"headers": {"Host": "api.example.com"}}) == "https://api.example.com"

    def test_first_forwarded_proto_wins(self) -> None:
        event = {"headers": {"Host": "h", "X-Forwarded-Proto": "https, http"}}
        assert base_url(event) == "https://h"

    def test_fallback_to_configured_host(self, monkeypatch) -> None:
        monkeypatch.setenv("HOST", "0.0.0.0")
        monkeypatch.setenv("PORT", "8080")
        assert base_url({"headers": {}}) == "http://0.0.0.0:8080"

    def test_fallback_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("HOST", raising=False)
        monkeypatch.delenv("PORT", raising=False)
        assert base_url({}) == "http://localhost:3000"

    def test_image_url_quotes_filename(self) -> None:
        event = {"headers": {"Host": "api.example.com"}}
        assert image_url(event, "my logo.svg") == "https://api.example.com/images/my%20logo.svg"

    def test_build_image_url(self) -> None:
        assert build_image_url("http://h", "a.svg") == "http://h/images/a.svg"


def test_request_log_context() -> None:
    class Context:
        aws_request_id = "req-1"
        function_name = "fn"

        def get_remaining_time_in_millis(self) -> int:
            return 1000

    ctx = request_log_context({"httpMethod": "GET", "path": "/health"}, Context())

    assert ctx["http_method"] == "GET"
    assert ctx["path"] == "/health"
    assert ctx["request_id"] == "req-1"
    assert ctx["remaining_time_ms"] == 1000
