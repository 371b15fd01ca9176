"""
Business logic for image listing.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.factory import build_metadata, build_storage
from core.models.errors import StorageError
from core.models.image import ImageRecord, ImageView, StoredObject
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import MSG_LIST_FAILED
from core.utils.reconcile import lookup_records, newest_first, stored_from_record
from core.utils.request import build_image_url

logger = Logger(UTC=True)


class ListService:
    """Application service responsible for listing images.

    This service coordinates:
    - Enumerating the storage backend
    - Merging metadata rows, falling back to storage data
    - Ordering results newest first
    """

    def __init__(
        self,
        storage: ImageStorageRepository | None = None,
        metadata: ImageMetadataRepository | None = None,
    ) -> None:
        self.storage = storage or build_storage()
        self.metadata = metadata or build_metadata()

    def _sources(self) -> list[tuple[StoredObject, ImageRecord | None]]:
        if self.storage.stores_inline:
            # Each row is both the stored image and its metadata.
            return [(stored_from_record(record), record) for record in self.metadata.list_metadata()]

        stored = self.storage.list_images()
        records = lookup_records(
            self.metadata,
            (obj.filename for obj in stored),
            required=False,
        )
        return [(obj, records.get(obj.filename)) for obj in stored]

    def list_images(self, *, base_url: str) -> list[ImageView]:
        """List every stored image.

        Raises:
            StorageError: If the storage backend cannot be enumerated
        """
        try:
            sources = self._sources()
        except StorageError as exc:
            logger.exception("Failed to list images")
            raise StorageError(
                message=MSG_LIST_FAILED,
                error_code=exc.error_code,
                details=exc.details,
            ) from exc

        views = [
            ImageView.from_sources(
                obj,
                record,
                url=build_image_url(base_url, obj.filename),
            )
            for obj, record in sources
        ]

        logger.info("Images listed", extra={"count": len(views)})
        return newest_first(views)
