"""Combine storage listings with metadata rows."""

from collections.abc import Iterable
from datetime import datetime, timezone

from aws_lambda_powertools import Logger

from core.models.errors import StorageError
from core.models.image import ImageRecord, ImageView, StoredObject
from core.repositories.metadata_repository import ImageMetadataRepository
from core.utils.time import to_utc_iso

logger = Logger(UTC=True)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def lookup_records(
    metadata: ImageMetadataRepository,
    filenames: Iterable[str],
    *,
    required: bool,
) -> dict[str, ImageRecord]:
    """Fetch metadata rows for ``filenames``.

    When ``required`` is False a failed lookup is logged and an empty mapping
    returned, so callers fall back to storage data.

    Raises:
        StorageError: If the lookup fails and ``required`` is True
    """
    names = list(filenames)

    try:
        return metadata.fetch_many(filenames=names)
    except StorageError as exc:
        if required:
            raise

        logger.warning(
            "Metadata lookup failed; using storage data",
            extra={"count": len(names), "error": exc.message, "details": exc.details},
        )
        return {}


def stored_from_record(record: ImageRecord) -> StoredObject:
    """Storage view of a metadata row, for backends whose rows hold the image."""
    return StoredObject(
        filename=record.filename,
        size=record.size,
        created_at=to_utc_iso(record.uploaded_at),
    )


def newest_first(views: list[ImageView]) -> list[ImageView]:
    """Sort by upload time, newest first; images without a time go last."""

    def uploaded(view: ImageView) -> datetime:
        if not view.uploaded_at:
            return _OLDEST
        return datetime.fromisoformat(view.uploaded_at)

    return sorted(views, key=uploaded, reverse=True)
