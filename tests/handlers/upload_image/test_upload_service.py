from unittest.mock import MagicMock

import pytest

from core.models.errors import InvalidFileError, InvalidSVGError, StorageError
from core.utils.constants import (
    ERROR_CODE_DATABASE,
    MSG_ONLY_SVG,
    MSG_UPLOAD_DB_FAILED,
    MSG_UPLOAD_FAILED,
)
from core.utils.multipart import UploadedFile
from handlers.upload_image.service import UploadService

BASE_URL = "https://api.example.com"


def _upload(filename: str = "a.svg", data: bytes = b"<svg></svg>", content_type: str | None = "image/svg+xml") -> UploadedFile:
    return UploadedFile(field_name="image", filename=filename, content_type=content_type, data=data)


class TestValidateUpload:
    def test_returns_basename(self) -> None:
        assert UploadService.validate_upload(_upload(filename="dir/a.svg")) == "a.svg"

    def test_missing_upload(self) -> None:
        with pytest.raises(InvalidFileError) as exc_info:
            UploadService.validate_upload(None)

        assert exc_info.value.details == {}

    def test_empty_filename(self) -> None:
        with pytest.raises(InvalidFileError):
            UploadService.validate_upload(_upload(filename=""))

    def test_wrong_type(self) -> None:
        with pytest.raises(InvalidFileError) as exc_info:
            UploadService.validate_upload(_upload(filename="a.png", content_type="image/png"))

        assert exc_info.value.details["reason"] == MSG_ONLY_SVG


class TestCheckSvgMarkup:
    def test_accepts_svg(self, sample_svg) -> None:
        UploadService.check_svg_markup(sample_svg)

    @pytest.mark.parametrize("data", [b"plain text", b"<svg>unterminated", b"\xff\xfe"])
    def test_rejects_other_content(self, data) -> None:
        with pytest.raises(InvalidSVGError):
            UploadService.check_svg_markup(data)


class TestUploadImage:
    def test_inline_row_carries_metadata(self, inline_storage, inline_metadata, sample_svg) -> None:
        service = UploadService(storage=inline_storage, metadata=inline_metadata)

        data = service.upload_image(upload=_upload(data=sample_svg), base_url=BASE_URL)

        record = inline_metadata.fetch_metadata(filename="a.svg")
        assert record is not None
        assert record.original_name == "a.svg"
        assert record.size == len(sample_svg)
        assert data.url == f"{BASE_URL}/images/a.svg"

    def test_filename_is_url_quoted(self, filesystem_storage, filesystem_metadata) -> None:
        service = UploadService(storage=filesystem_storage, metadata=filesystem_metadata)

        data = service.upload_image(upload=_upload(filename="my logo.svg"), base_url=BASE_URL)

        assert data.filename == "my logo.svg"
        assert data.url == f"{BASE_URL}/images/my%20logo.svg"

    def test_storage_failure(self) -> None:
        storage = MagicMock()
        storage.stores_inline = False
        storage.save_image.side_effect = StorageError(message="disk full")
        metadata = MagicMock()

        with pytest.raises(StorageError) as exc_info:
            UploadService(storage=storage, metadata=metadata).upload_image(
                upload=_upload(), base_url=BASE_URL
            )

        assert exc_info.value.message == MSG_UPLOAD_FAILED
        metadata.upsert_metadata.assert_not_called()

    def test_invalid_upload_never_reaches_storage(self) -> None:
        storage = MagicMock()
        storage.stores_inline = True

        with pytest.raises(InvalidSVGError):
            UploadService(storage=storage, metadata=MagicMock()).upload_image(
                upload=_upload(data=b"not svg"), base_url=BASE_URL
            )

        storage.save_image.assert_not_called()

    def test_inline_skips_separate_metadata_upsert(self, inline_storage) -> None:
        metadata = MagicMock()

        UploadService(storage=inline_storage, metadata=metadata).upload_image(
            upload=_upload(), base_url=BASE_URL
        )

        metadata.upsert_metadata.assert_not_called()

    def test_inline_storage_failure_is_database_error(self) -> None:
        storage = MagicMock()
        storage.stores_inline = True
        storage.save_image.side_effect = StorageError(
            message="Unable to store image content", details={"reason": "connection refused"}
        )

        with pytest.raises(StorageError) as exc_info:
            UploadService(storage=storage, metadata=MagicMock()).upload_image(
                upload=_upload(), base_url=BASE_URL
            )

        assert exc_info.value.message == MSG_UPLOAD_DB_FAILED
        assert exc_info.value.error_code == ERROR_CODE_DATABASE
        assert exc_info.value.details == {"reason": "connection refused"}


class TestMimeOnlyUpload:
    def test_filesystem_key_is_literal_and_listed(self, filesystem_storage, filesystem_metadata) -> None:
        service = UploadService(storage=filesystem_storage, metadata=filesystem_metadata)

        data = service.upload_image(upload=_upload(filename="drawing.xml"), base_url=BASE_URL)

        assert data.filename == "drawing.xml"
        assert [obj.filename for obj in filesystem_storage.list_images()] == ["drawing.xml"]

    def test_inline_key_is_literal(self, inline_storage, inline_metadata) -> None:
        service = UploadService(storage=inline_storage, metadata=inline_metadata)

        data = service.upload_image(upload=_upload(filename="drawing.xml"), base_url=BASE_URL)

        assert data.filename == "drawing.xml"
        assert inline_storage.stat_image(key="drawing.xml") is not None
