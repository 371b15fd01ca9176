"""
Business logic for serving raw image content.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.factory import build_storage
from core.models.errors import StorageError
from core.models.image import ImageContent
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import MSG_SERVE_FAILED

logger = Logger(UTC=True)


class ServeService:
    """Application service responsible for reading image bytes."""

    def __init__(self, storage: ImageStorageRepository | None = None) -> None:
        self.storage = storage or build_storage()

    def load_image(self, filename: str) -> ImageContent:
        """Read the stored bytes and MIME type of an image.

        Raises:
            NotFoundError: If the image does not exist
            ContentUnavailableError: If the row exists without content
            StorageError: If the read fails
        """
        try:
            image = self.storage.load_image(key=filename)
        except StorageError as exc:
            logger.exception("Failed to read image", extra={"key": filename})
            raise StorageError(
                message=MSG_SERVE_FAILED,
                error_code=exc.error_code,
                details=exc.details,
            ) from exc

        logger.debug(
            "Image loaded",
            extra={"key": filename, "size": len(image.content), "mime_type": image.mime_type},
        )
        return image
