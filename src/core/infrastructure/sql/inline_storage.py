"""Database-backed implementation of ImageStorageRepository.

SVG text is kept in the ``content`` column of the images table, so a single
row is both the stored file and its metadata.
"""

from aws_lambda_powertools import Logger
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from core.infrastructure.adapters.database_adapter import (
    DatabaseAdapter,
    DatabaseAdapterProtocol,
)
from core.infrastructure.sql.schema import build_upsert, images_table
from core.models.errors import (
    ContentUnavailableError,
    DatabaseError,
    InvalidSVGError,
    NotFoundError,
)
from core.models.image import ImageContent, ImageRecord, StoredObject
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
from core.utils.time import to_utc_iso, utc_now

logger = Logger(UTC=True)

_ROW_UPDATE_COLUMNS = ("original_name", "size", "content", "mime_type", "uploaded_at")


class InlineImageStorage(ImageStorageRepository):
    """Image storage implementation backed by a TEXT column."""

    stores_inline = True

    def __init__(self, adapter: DatabaseAdapterProtocol | None = None) -> None:
        """Create storage using the provided database adapter."""
        self._db: DatabaseAdapterProtocol = adapter or DatabaseAdapter(inline=True)

    def save_image(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        original_name: str | None = None,
    ) -> str:
        """Write content and metadata as one upsert, so a failure stores nothing."""
        try:
            content = file_data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidSVGError(details={"filename": key, "encoding": "utf-8"}) from exc

        record = ImageRecord(
            filename=key,
            original_name=original_name,
            size=len(file_data),
            content=content,
            mime_type=mime_type,
            uploaded_at=utc_now(),
        )

        logger.debug("Storing image content", extra={"key": key, "size": record.size})

        try:
            self._db.execute(
                build_upsert(
                    self._db.dialect_name,
                    record.model_dump(),
                    update_columns=_ROW_UPDATE_COLUMNS,
                )
            )
        except SQLAlchemyError as exc:
            logger.error("Storing image content failed", extra={"key": key})
            raise DatabaseError(
                message="Unable to store image content",
                error_code=ERROR_CODE_IMAGE_UPLOAD_FAILED,
                details={"filename": key, "reason": str(exc)},
            ) from exc

        logger.info("Image content stored", extra={"key": key})
        return key

    def load_image(self, *, key: str) -> ImageContent:
        try:
            row = self._db.fetch_one(
                select(images_table.c.content, images_table.c.mime_type).where(
                    images_table.c.filename == key
                )
            )
        except SQLAlchemyError as exc:
            logger.error("Reading image content failed", extra={"key": key})
            raise DatabaseError(
                message="Unable to read image content",
                error_code=ERROR_CODE_IMAGE_READ_FAILED,
                details={"filename": key, "reason": str(exc)},
            ) from exc

        if row is None:
            raise NotFoundError(
                message=MSG_IMAGE_NOT_FOUND,
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"filename": key},
            )

        # Rows written before inline storage was enabled have no content.
        if row["content"] is None:
            logger.warning("Image row has no content", extra={"key": key})
            raise ContentUnavailableError(details={"filename": key})

        return ImageContent(
            filename=key,
            content=row["content"].encode("utf-8"),
            mime_type=row["mime_type"] or SVG_MIME_TYPE,
        )

    def stat_image(self, *, key: str) -> StoredObject | None:
        try:
            row = self._db.fetch_one(
                select(
                    images_table.c.filename,
                    images_table.c.size,
                    images_table.c.uploaded_at,
                ).where(images_table.c.filename == key)
            )
        except SQLAlchemyError as exc:
            logger.error("Image lookup failed", extra={"key": key})
            raise DatabaseError(
                message="Unable to look up image",
                error_code=ERROR_CODE_IMAGE_READ_FAILED,
                details={"filename": key, "reason": str(exc)},
            ) from exc

        if row is None:
            return None

        return StoredObject(
            filename=row["filename"],
            size=int(row["size"] or 0),
            created_at=to_utc_iso(row["uploaded_at"]),
        )

    def list_images(self) -> list[StoredObject]:
        try:
            rows = self._db.fetch_all(
                select(
                    images_table.c.filename,
                    images_table.c.size,
                    images_table.c.uploaded_at,
                ).order_by(images_table.c.uploaded_at.desc())
            )
        except SQLAlchemyError as exc:
            logger.error("Image listing failed")
            raise DatabaseError(
                message="Unable to list images",
                error_code=ERROR_CODE_IMAGE_LIST_FAILED,
                details={"reason": str(exc)},
            ) from exc

        return [
            StoredObject(
                filename=row["filename"],
                size=int(row["size"] or 0),
                created_at=to_utc_iso(row["uploaded_at"]),
            )
            for row in rows
        ]

    def remove_image(self, *, key: str) -> bool:
        logger.debug("Deleting image row", extra={"key": key})

        try:
            rows = self._db.execute_returning(
                delete(images_table)
                .where(images_table.c.filename == key)
                .returning(images_table.c.filename)
            )
        except SQLAlchemyError as exc:
            logger.error("Deleting image row failed", extra={"key": key})
            raise DatabaseError(
                message="Unable to delete image",
                error_code=ERROR_CODE_IMAGE_DELETE_FAILED,
                details={"filename": key, "reason": str(exc)},
            ) from exc

        if rows:
            logger.info("Image deleted successfully", extra={"key": key})

        return bool(rows)
