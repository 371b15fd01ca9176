"""Abstract contract for image metadata persistence."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from core.models.image import ImageRecord


class ImageMetadataRepository(ABC):
    """Contract for storing and retrieving image metadata.

    Implementations could be PostgreSQL, SQLite, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def upsert_metadata(self, *, record: ImageRecord) -> None:
        """Insert metadata or update the existing row with the same filename.

        Re-uploads keep the row identity and refresh original name, size and
        ``uploaded_at``.

        Raises:
            DatabaseError: If the write fails
        """

    @abstractmethod
    def fetch_metadata(self, *, filename: str) -> ImageRecord | None:
        """Fetch metadata for a single image.

        Returns:
            The record or None if not found

        Raises:
            DatabaseError: If fetch fails
        """

    @abstractmethod
    def fetch_many(self, *, filenames: Iterable[str]) -> dict[str, ImageRecord]:
        """Fetch metadata for several images keyed by filename.

        Filenames without a row are simply absent from the result.

        Raises:
            DatabaseError: If fetch fails
        """

    @abstractmethod
    def list_metadata(self) -> list[ImageRecord]:
        """List all records, newest upload first.

        Raises:
            DatabaseError: If the query fails
        """

    @abstractmethod
    def remove_metadata(self, *, filename: str) -> bool:
        """Remove metadata for an image.

        Returns:
            True if a row was deleted

        Raises:
            DatabaseError: If deletion fails
        """

    @abstractmethod
    def dump_metadata(self) -> list[dict[str, Any]]:
        """Return raw rows for diagnostics, newest upload first.

        Raises:
            DatabaseError: If the query fails
        """

    @abstractmethod
    def ping(self) -> None:
        """Check connectivity.

        Raises:
            DatabaseError: If the database cannot be reached
        """
