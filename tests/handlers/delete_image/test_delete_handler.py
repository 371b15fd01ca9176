import json
from unittest.mock import MagicMock, patch

from core.models.errors import DatabaseError
from core.models.image import ImageRecord
from core.utils.constants import MSG_DELETE_OK, MSG_IMAGE_NOT_FOUND
from handlers.delete_image.handler import handler
from handlers.upload_image.handler import handler as upload_handler


def _delete_event(api_event, filename: str):
    return api_event("DELETE", f"/images/{filename}", path_params={"filename": filename})


class TestDeleteHandler:
    def test_delete_then_not_found(self, storage_backend, api_event, upload_event, lambda_context) -> None:
        upload_handler(upload_event(filename="a.svg"), lambda_context)

        first = handler(_delete_event(api_event, "a.svg"), lambda_context)
        second = handler(_delete_event(api_event, "a.svg"), lambda_context)

        assert first["statusCode"] == 200
        assert json.loads(first["body"]) == {"success": True, "message": MSG_DELETE_OK}
        assert second["statusCode"] == 404
        assert json.loads(second["body"])["message"] == MSG_IMAGE_NOT_FOUND

    def test_missing_path_parameter(self, storage_backend, api_event, lambda_context) -> None:
        response = handler(api_event("DELETE", "/images/"), lambda_context)

        assert response["statusCode"] == 400


class TestFilesystemDelete:
    def test_removes_file_and_row(
        self, filesystem_backend, upload_dir, api_event, upload_event, lambda_context, filesystem_metadata
    ) -> None:
        upload_handler(upload_event(filename="a.svg"), lambda_context)

        handler(_delete_event(api_event, "a.svg"), lambda_context)

        assert not (upload_dir / "a.svg").exists()
        assert filesystem_metadata.fetch_metadata(filename="a.svg") is None

    def test_metadata_failure_is_ignored(
        self, filesystem_backend, upload_dir, api_event, upload_event, lambda_context
    ) -> None:
        upload_handler(upload_event(filename="a.svg"), lambda_context)
        metadata = MagicMock()
        metadata.remove_metadata.side_effect = DatabaseError(message="down")

        with patch("handlers.delete_image.service.build_metadata", return_value=metadata):
            response = handler(_delete_event(api_event, "a.svg"), lambda_context)

        assert response["statusCode"] == 200
        assert not (upload_dir / "a.svg").exists()

    def test_row_without_file_is_not_found(
        self, filesystem_backend, api_event, lambda_context, filesystem_metadata
    ) -> None:
        filesystem_metadata.upsert_metadata(record=ImageRecord(filename="ghost.svg", size=1))

        response = handler(_delete_event(api_event, "ghost.svg"), lambda_context)

        assert response["statusCode"] == 404
