"""Local-disk implementation of ImageStorageRepository."""

from aws_lambda_powertools import Logger

from core.infrastructure.adapters.filesystem_adapter import FilesystemAdapter
from core.models.errors import NotFoundError, StorageError
from core.models.image import ImageContent, StoredObject
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    ERROR_CODE_IMAGE_DELETE_FAILED,
    ERROR_CODE_IMAGE_LIST_FAILED,
    ERROR_CODE_IMAGE_NOT_FOUND,
    ERROR_CODE_IMAGE_READ_FAILED,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    MSG_IMAGE_NOT_FOUND,
    SVG_MIME_TYPE,
)
from core.utils.time import to_utc_iso

logger = Logger(UTC=True)


class FilesystemImageStorage(ImageStorageRepository):
    """Image storage implementation backed by files in the uploads directory.

    The filename is the key; uploading the same name again replaces the file.
    """

    def __init__(self, adapter: FilesystemAdapter | None = None) -> None:
        """Create storage using the provided filesystem adapter."""
        self._fs = adapter or FilesystemAdapter()

    def save_image(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        original_name: str | None = None,
    ) -> str:
        logger.debug(
            "Writing image file",
            extra={"key": key, "size": len(file_data), "mime_type": mime_type},
        )

        try:
            self._fs.write_bytes(key, file_data)
        except (OSError, ValueError) as exc:
            logger.error("Writing image file failed", extra={"key": key})
            raise StorageError(
                message="Unable to write image file",
                error_code=ERROR_CODE_IMAGE_UPLOAD_FAILED,
                details={"filename": key, "reason": str(exc)},
            ) from exc

        logger.info("Image file written", extra={"key": key})
        return key

    def load_image(self, *, key: str) -> ImageContent:
        try:
            data = self._fs.read_bytes(key)
        except (FileNotFoundError, ValueError) as exc:
            raise NotFoundError(
                message=MSG_IMAGE_NOT_FOUND,
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"filename": key},
            ) from exc
        except OSError as exc:
            logger.error("Reading image file failed", extra={"key": key})
            raise StorageError(
                message="Unable to read image file",
                error_code=ERROR_CODE_IMAGE_READ_FAILED,
                details={"filename": key, "reason": str(exc)},
            ) from exc

        # Every stored file passed the SVG check on upload.
        return ImageContent(filename=key, content=data, mime_type=SVG_MIME_TYPE)

    def stat_image(self, *, key: str) -> StoredObject | None:
        try:
            stat = self._fs.stat(key)
        except (FileNotFoundError, ValueError):
            return None
        except OSError as exc:
            logger.error("Reading image file status failed", extra={"key": key})
            raise StorageError(
                message="Unable to read image file",
                error_code=ERROR_CODE_IMAGE_READ_FAILED,
                details={"filename": key, "reason": str(exc)},
            ) from exc

        return StoredObject(
            filename=key,
            size=stat.st_size,
            created_at=to_utc_iso(stat.st_ctime),
        )

    def list_images(self) -> list[StoredObject]:
        try:
            keys = self._fs.list_keys()
        except OSError as exc:
            logger.error("Listing upload directory failed")
            raise StorageError(
                message="Unable to list image files",
                error_code=ERROR_CODE_IMAGE_LIST_FAILED,
                details={"reason": str(exc)},
            ) from exc

        objects: list[StoredObject] = []
        for key in keys:
            stored = self.stat_image(key=key)
            # Deleted between listing and stat.
            if stored is not None:
                objects.append(stored)

        return objects

    def remove_image(self, *, key: str) -> bool:
        logger.debug("Deleting image file", extra={"key": key})

        try:
            self._fs.delete(key)
        except (FileNotFoundError, ValueError):
            return False
        except OSError as exc:
            logger.error("Deleting image file failed", extra={"key": key})
            raise StorageError(
                message="Unable to delete image file",
                error_code=ERROR_CODE_IMAGE_DELETE_FAILED,
                details={"filename": key, "reason": str(exc)},
            ) from exc

        logger.info("Image deleted successfully", extra={"key": key})
        return True
