"""SQL-backed implementation of ImageMetadataRepository."""

from collections.abc import Iterable
from typing import Any

from aws_lambda_powertools import Logger
from sqlalchemy import delete, func, null, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import SQLAlchemyError

from core.infrastructure.adapters.database_adapter import (
    DatabaseAdapter,
    DatabaseAdapterProtocol,
)
from core.infrastructure.sql.schema import build_upsert, images_table
from core.models.errors import DatabaseError
from core.models.image import ImageRecord
from core.repositories.metadata_repository import ImageMetadataRepository
from core.utils.constants import (
    ERROR_CODE_DATABASE,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_LIST_FAILED,
    ERROR_CODE_METADATA_UPSERT_FAILED,
    METADATA_LOOKUP_BATCH_SIZE,
)
from core.utils.time import to_utc_iso, utc_now

logger = Logger(UTC=True)

# Only columns every schema generation has; content lives with the storage backend.
_SUMMARY_COLUMNS = (
    images_table.c.filename,
    images_table.c.original_name,
    images_table.c.size,
    images_table.c.uploaded_at,
)


class SqlImageMetadata(ImageMetadataRepository):
    """Relational metadata storage with error handling.

    All SQLAlchemy errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(
        self,
        adapter: DatabaseAdapterProtocol | None = None,
        *,
        inline: bool = True,
    ) -> None:
        """Initialize with a database adapter.

        ``inline`` tells whether the table carries a ``content`` column.
        """
        self._inline = inline
        self._db: DatabaseAdapterProtocol = adapter or DatabaseAdapter(inline=inline)

    def upsert_metadata(self, *, record: ImageRecord) -> None:
        values = {
            "filename": record.filename,
            "original_name": record.original_name,
            "size": record.size,
            "uploaded_at": record.uploaded_at or utc_now(),
        }

        logger.debug("Upserting metadata", extra={"image": record.filename})

        try:
            self._db.execute(
                build_upsert(
                    self._db.dialect_name,
                    values,
                    update_columns=("original_name", "size", "uploaded_at"),
                )
            )
        except SQLAlchemyError as exc:
            logger.error("Metadata upsert failed", extra={"image": record.filename})
            raise DatabaseError(
                message="Unable to save image metadata at this time",
                error_code=ERROR_CODE_METADATA_UPSERT_FAILED,
                details={"filename": record.filename, "reason": str(exc)},
            ) from exc

        logger.info("Metadata saved", extra={"image": record.filename})

    def fetch_metadata(self, *, filename: str) -> ImageRecord | None:
        logger.debug("Fetching metadata", extra={"image": filename})

        try:
            row = self._db.fetch_one(
                select(*_SUMMARY_COLUMNS).where(images_table.c.filename == filename)
            )
        except SQLAlchemyError as exc:
            logger.error("Metadata fetch failed", extra={"image": filename})
            raise DatabaseError(
                message="Unable to retrieve image metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"filename": filename, "reason": str(exc)},
            ) from exc

        return self._to_record(row) if row is not None else None

    def fetch_many(self, *, filenames: Iterable[str]) -> dict[str, ImageRecord]:
        names = list(filenames)
        records: dict[str, ImageRecord] = {}

        for start in range(0, len(names), METADATA_LOOKUP_BATCH_SIZE):
            batch = names[start : start + METADATA_LOOKUP_BATCH_SIZE]
            try:
                rows = self._db.fetch_all(
                    select(*_SUMMARY_COLUMNS).where(images_table.c.filename.in_(batch))
                )
            except SQLAlchemyError as exc:
                logger.error("Metadata batch fetch failed", extra={"count": len(names)})
                raise DatabaseError(
                    message="Unable to retrieve image metadata",
                    error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                    details={"count": len(names), "reason": str(exc)},
                ) from exc

            records.update((row["filename"], self._to_record(row)) for row in rows)

        return records

    def list_metadata(self) -> list[ImageRecord]:
        try:
            rows = self._db.fetch_all(
                select(*_SUMMARY_COLUMNS).order_by(images_table.c.uploaded_at.desc())
            )
        except SQLAlchemyError as exc:
            logger.error("Metadata listing failed")
            raise DatabaseError(
                message="Unable to list image metadata",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details={"reason": str(exc)},
            ) from exc

        return [self._to_record(row) for row in rows]

    def remove_metadata(self, *, filename: str) -> bool:
        logger.debug("Removing metadata", extra={"image": filename})

        try:
            rows = self._db.execute_returning(
                delete(images_table)
                .where(images_table.c.filename == filename)
                .returning(images_table.c.filename)
            )
        except SQLAlchemyError as exc:
            logger.error("Metadata delete failed", extra={"image": filename})
            raise DatabaseError(
                message="Unable to delete image metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"filename": filename, "reason": str(exc)},
            ) from exc

        return bool(rows)

    def dump_metadata(self) -> list[dict[str, Any]]:
        content_length = (
            func.length(images_table.c.content) if self._inline else null()
        ).label("content_length")

        try:
            rows = self._db.fetch_all(
                select(*_SUMMARY_COLUMNS, content_length).order_by(
                    images_table.c.uploaded_at.desc()
                )
            )
        except SQLAlchemyError as exc:
            logger.error("Metadata dump failed")
            raise DatabaseError(
                message="Unable to read image table",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details={"reason": str(exc)},
            ) from exc

        return [
            {
                "filename": row["filename"],
                "original_name": row["original_name"],
                "size": row["size"],
                "content_length": row["content_length"],
                "uploaded_at": to_utc_iso(row["uploaded_at"]),
            }
            for row in rows
        ]

    def ping(self) -> None:
        try:
            self._db.ping()
        except SQLAlchemyError as exc:
            raise DatabaseError(
                message="Database is unreachable",
                error_code=ERROR_CODE_DATABASE,
                details={"reason": str(exc)},
            ) from exc

    @staticmethod
    def _to_record(row: RowMapping) -> ImageRecord:
        return ImageRecord(
            filename=row["filename"],
            original_name=row["original_name"],
            size=int(row["size"] or 0),
            uploaded_at=row["uploaded_at"],
        )
