"""Abstract contract for image file storage."""

from abc import ABC, abstractmethod

from core.models.image import ImageContent, StoredObject


class ImageStorageRepository(ABC):
    """Contract for storing and retrieving image bytes.

    Implementations could be local disk, a database column, object storage, etc.
    Services depend on this interface, not the implementation.

    ``stores_inline`` is True when the bytes live in the metadata row itself,
    which makes the metadata store authoritative for that backend.
    """

    stores_inline: bool = False

    @abstractmethod
    def save_image(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        original_name: str | None = None,
    ) -> str:
        """Store image bytes under ``key``, overwriting any previous value.

        Inline backends write the whole metadata row in the same statement.

        Args:
            key: Storage key (the image filename)
            file_data: Binary image content
            mime_type: MIME type (e.g., 'image/svg+xml')
            original_name: Client-supplied file name

        Returns:
            Storage key for later retrieval

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    def load_image(self, *, key: str) -> ImageContent:
        """Read image bytes by key.

        Raises:
            NotFoundError: If nothing is stored under ``key``
            StorageError: If the read fails
        """

    @abstractmethod
    def stat_image(self, *, key: str) -> StoredObject | None:
        """Describe a stored image, or return None if it does not exist.

        Raises:
            StorageError: If the lookup fails
        """

    @abstractmethod
    def list_images(self) -> list[StoredObject]:
        """Enumerate every stored image.

        Raises:
            StorageError: If enumeration fails
        """

    @abstractmethod
    def remove_image(self, *, key: str) -> bool:
        """Delete an image by key.

        Returns:
            True if something was deleted, False if the key was absent

        Raises:
            StorageError: If deletion fails
        """
