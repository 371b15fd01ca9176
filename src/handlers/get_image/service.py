"""
Business logic for image metadata retrieval.

Storage decides whether an image exists; the metadata row, when there is
one, supplies the original name and upload time.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.factory import build_metadata, build_storage
from core.models.errors import NotFoundError, StorageError
from core.models.image import ImageView
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    ERROR_CODE_IMAGE_NOT_FOUND,
    MSG_FETCH_FAILED,
    MSG_IMAGE_NOT_FOUND,
)
from core.utils.reconcile import lookup_records
from core.utils.request import build_image_url

logger = Logger(UTC=True)


class GetService:
    """Application service responsible for describing a single image."""

    def __init__(
        self,
        storage: ImageStorageRepository | None = None,
        metadata: ImageMetadataRepository | None = None,
    ) -> None:
        self.storage = storage or build_storage()
        self.metadata = metadata or build_metadata()

    def get_image(self, filename: str, *, base_url: str) -> ImageView:
        """Describe one image.

        Raises:
            NotFoundError: If nothing is stored under ``filename``
            StorageError: If storage or a required metadata lookup fails
        """
        logger.debug("Fetching image details", extra={"key": filename})

        try:
            stored = self.storage.stat_image(key=filename)
            if stored is None:
                logger.warning("Image not found", extra={"key": filename})
                raise NotFoundError(
                    message=MSG_IMAGE_NOT_FOUND,
                    error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                    details={"filename": filename},
                )

            records = lookup_records(
                self.metadata,
                [filename],
                required=self.storage.stores_inline,
            )
        except StorageError as exc:
            logger.exception("Failed to fetch image details", extra={"key": filename})
            raise StorageError(
                message=MSG_FETCH_FAILED,
                error_code=exc.error_code,
                details=exc.details,
            ) from exc

        return ImageView.from_sources(
            stored,
            records.get(filename),
            url=build_image_url(base_url, filename),
        )
