import json
from unittest.mock import MagicMock, patch

from core.models.errors import DatabaseError
from core.utils.constants import MSG_LIST_FAILED
from handlers.list_images.handler import handler
from handlers.upload_image.handler import handler as upload_handler


def _failing_metadata() -> MagicMock:
    metadata = MagicMock()
    error = DatabaseError(message="down", details={"reason": "down"})
    metadata.fetch_many.side_effect = error
    metadata.list_metadata.side_effect = error
    return metadata


class TestListHandler:
    def test_empty(self, storage_backend, api_event, lambda_context) -> None:
        response = handler(api_event("GET", "/images/list"), lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"success": True, "count": 0, "images": []}

    def test_newest_first(self, storage_backend, api_event, upload_event, lambda_context) -> None:
        upload_handler(upload_event(filename="first.svg"), lambda_context)
        upload_handler(upload_event(filename="second.svg"), lambda_context)

        response = handler(api_event("GET", "/images/list"), lambda_context)

        body = json.loads(response["body"])
        assert body["count"] == 2
        assert [image["filename"] for image in body["images"]] == ["second.svg", "first.svg"]

        image = body["images"][0]
        assert image["url"] == "https://api.example.com/images/second.svg"
        assert image["directUrl"] == image["url"]
        assert image["uploadedAt"] is not None

    def test_original_name_from_metadata(self, storage_backend, api_event, upload_event, lambda_context) -> None:
        upload_handler(upload_event(filename="dir/logo.svg"), lambda_context)

        body = json.loads(handler(api_event("GET", "/images/list"), lambda_context)["body"])

        assert body["images"][0]["originalName"] == "dir/logo.svg"


class TestFilesystemFallback:
    def test_file_without_metadata_row(self, filesystem_backend, upload_dir, api_event, lambda_context) -> None:
        upload_dir.mkdir(parents=True, exist_ok=True)
        (upload_dir / "copied.svg").write_bytes(b"<svg></svg>")

        body = json.loads(handler(api_event("GET", "/images/list"), lambda_context)["body"])

        assert body["images"][0]["filename"] == "copied.svg"
        assert body["images"][0]["originalName"] == "copied.svg"
        assert body["images"][0]["size"] == len(b"<svg></svg>")

    def test_metadata_failure_uses_file_data(
        self, filesystem_backend, api_event, upload_event, lambda_context
    ) -> None:
        upload_handler(upload_event(filename="a.svg"), lambda_context)

        with patch("handlers.list_images.service.build_metadata", return_value=_failing_metadata()):
            response = handler(api_event("GET", "/images/list"), lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["images"][0]["filename"] == "a.svg"


def test_inline_metadata_failure(inline_backend, api_event, upload_event, lambda_context) -> None:
    upload_handler(upload_event(filename="a.svg"), lambda_context)

    with patch("handlers.list_images.service.build_metadata", return_value=_failing_metadata()):
        response = handler(api_event("GET", "/images/list"), lambda_context)

    assert response["statusCode"] == 500
    assert json.loads(response["body"])["message"] == MSG_LIST_FAILED


def test_inline_lists_rows_in_one_query(inline_backend, api_event, upload_event, lambda_context) -> None:
    upload_handler(upload_event(filename="a.svg"), lambda_context)

    with patch(
        "core.infrastructure.sql.sql_metadata.SqlImageMetadata.fetch_many",
        side_effect=AssertionError("per-file lookup"),
    ):
        response = handler(api_event("GET", "/images/list"), lambda_context)

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["images"][0]["originalName"] == "a.svg"
