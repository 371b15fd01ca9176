"""Raw view of the images table for troubleshooting."""

from aws_lambda_powertools import Logger

from core.infrastructure.factory import build_metadata
from core.repositories.metadata_repository import ImageMetadataRepository

from .models import DebugImageRow

logger = Logger(UTC=True)


class DebugService:
    def __init__(self, metadata: ImageMetadataRepository | None = None) -> None:
        self.metadata = metadata or build_metadata()

    def dump_images(self) -> list[DebugImageRow]:
        """Every row, newest upload first.

        Raises:
            DatabaseError: If the table cannot be read
        """
        rows = [DebugImageRow(**row) for row in self.metadata.dump_metadata()]
        logger.info("Image table dumped", extra={"count": len(rows)})
        return rows
