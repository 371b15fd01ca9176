"""Business logic for image deletion.

This module removes an image from the storage backend and then cleans up
its metadata row, translating failures into domain-specific errors.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.factory import build_metadata, build_storage
from core.models.errors import NotFoundError, StorageError
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    ERROR_CODE_IMAGE_NOT_FOUND,
    MSG_DELETE_FAILED,
    MSG_IMAGE_NOT_FOUND,
)

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting images.

    This service orchestrates:
    - Deletion of the image from the storage backend
    - Best-effort removal of the metadata row

    It does not perform low-level infrastructure operations directly.
    """

    def __init__(
        self,
        storage: ImageStorageRepository | None = None,
        metadata: ImageMetadataRepository | None = None,
    ) -> None:
        """Use the given repositories, or the configured ones."""
        self.storage = storage or build_storage()
        self.metadata = metadata or build_metadata()

    def delete_image(self, filename: str) -> None:
        """Delete an image and its metadata.

        The deletion flow is:
        1. Remove the image from storage; absence means 404
        2. Remove the metadata row (filesystem storage only; for inline
           storage step 1 already deleted the row)

        A failure in step 2 is logged and not reported to the caller.

        Raises:
            NotFoundError: If nothing is stored under ``filename``
            StorageError: If storage deletion fails
        """
        logger.debug("Starting image deletion", extra={"key": filename})

        try:
            removed = self.storage.remove_image(key=filename)
        except StorageError as exc:
            logger.exception("Failed to delete image from storage", extra={"key": filename})
            raise StorageError(
                message=MSG_DELETE_FAILED,
                error_code=exc.error_code,
                details=exc.details,
            ) from exc

        if not removed:
            logger.warning("Image not found", extra={"key": filename})
            raise NotFoundError(
                message=MSG_IMAGE_NOT_FOUND,
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"filename": filename},
            )

        if not self.storage.stores_inline:
            try:
                self.metadata.remove_metadata(filename=filename)
            except StorageError as exc:
                logger.warning(
                    "Failed to delete image metadata",
                    extra={"key": filename, "error": exc.message, "details": exc.details},
                )

        logger.info("Image deleted successfully", extra={"key": filename})
