"""Business logic for image upload operations.

This module coordinates validation, storage, and metadata persistence
for image uploads while translating failures into domain-specific errors.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.factory import build_metadata, build_storage
from core.models.errors import (
    InvalidFileError,
    InvalidSVGError,
    StorageError,
)
from core.models.image import ImageRecord
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    ERROR_CODE_DATABASE,
    MSG_ONLY_SVG,
    MSG_UPLOAD_DB_FAILED,
    MSG_UPLOAD_FAILED,
    SVG_MIME_TYPE,
)
from core.utils.multipart import UploadedFile
from core.utils.request import build_image_url
from core.utils.time import utc_now
from core.utils.validators import is_svg_upload, looks_like_svg, normalize_filename

from .models import UploadedImageData

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for image uploads.

    This service orchestrates:
    - File type and markup validation
    - Writing image bytes to the storage backend
    - Upserting the metadata row
    """

    def __init__(
        self,
        storage: ImageStorageRepository | None = None,
        metadata: ImageMetadataRepository | None = None,
    ) -> None:
        """Use the given repositories, or the configured ones."""
        self.storage = storage or build_storage()
        self.metadata = metadata or build_metadata()

    @staticmethod
    def validate_upload(upload: UploadedFile | None) -> str:
        """Check the file part and return its storage key.

        Raises:
            InvalidFileError: If no usable SVG file part was sent
        """
        if upload is None:
            raise InvalidFileError()

        filename = normalize_filename(upload.filename)
        if not filename:
            raise InvalidFileError(details={"reason": "Empty filename"})

        if not is_svg_upload(filename, upload.content_type):
            logger.warning(
                "Rejected non-SVG upload",
                extra={"image": filename, "content_type": upload.content_type},
            )
            raise InvalidFileError(
                details={"reason": MSG_ONLY_SVG, "content_type": upload.content_type},
            )

        return filename

    @staticmethod
    def check_svg_markup(file_data: bytes) -> None:
        """Reject payloads that are not UTF-8 text containing an svg element.

        Raises:
            InvalidSVGError: If the markup check fails
        """
        try:
            text = file_data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidSVGError(details={"encoding": "utf-8"}) from exc

        if not looks_like_svg(text):
            raise InvalidSVGError()

    def upload_image(self, *, upload: UploadedFile | None, base_url: str) -> UploadedImageData:
        """Store an uploaded SVG and record its metadata.

        The upload flow is:
        1. Validate the file part (and the markup, for inline storage)
        2. Write the bytes under the filename, replacing any previous upload
        3. Upsert the metadata row (filesystem storage only)

        For inline storage the row is the image: content and metadata go in
        one upsert, so a failure leaves nothing behind. For filesystem storage
        a failed metadata upsert is only logged; listing falls back to file
        stat data.

        Raises:
            InvalidFileError: If no usable SVG file part was sent
            InvalidSVGError: If inline content is not SVG markup
            StorageError: If the image could not be stored
        """
        filename = self.validate_upload(upload)
        file_data = upload.data
        inline = self.storage.stores_inline

        if inline:
            self.check_svg_markup(file_data)

        logger.debug(
            "Starting image upload",
            extra={"image": filename, "size": len(file_data), "inline": inline},
        )

        try:
            self.storage.save_image(
                key=filename,
                file_data=file_data,
                mime_type=SVG_MIME_TYPE,
                original_name=upload.filename,
            )
        except StorageError as exc:
            logger.exception("Image upload to storage failed", extra={"image": filename})
            raise StorageError(
                message=MSG_UPLOAD_DB_FAILED if inline else MSG_UPLOAD_FAILED,
                error_code=ERROR_CODE_DATABASE if inline else exc.error_code,
                details=exc.details,
            ) from exc

        if not inline:
            self._record_metadata(filename=filename, upload=upload)

        logger.info(
            "Image uploaded successfully",
            extra={"image": filename, "size": len(file_data)},
        )

        url = build_image_url(base_url, filename)
        return UploadedImageData(
            filename=filename,
            original_name=upload.filename,
            size=len(file_data),
            url=url,
            direct_url=url,
        )

    def _record_metadata(self, *, filename: str, upload: UploadedFile) -> None:
        """Upsert the metadata row for a file already on disk; failures are logged."""
        record = ImageRecord(
            filename=filename,
            original_name=upload.filename,
            size=len(upload.data),
            uploaded_at=utc_now(),
        )

        try:
            self.metadata.upsert_metadata(record=record)
        except StorageError as exc:
            logger.warning(
                "Metadata upsert failed; file was stored",
                extra={"image": filename, "error": exc.message, "details": exc.details},
            )
