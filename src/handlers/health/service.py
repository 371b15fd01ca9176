"""Database health check."""

from aws_lambda_powertools import Logger
from sqlalchemy.exc import SQLAlchemyError

from core.infrastructure.factory import build_metadata
from core.models.errors import StorageError
from core.repositories.metadata_repository import ImageMetadataRepository
from core.utils.time import utc_now_iso

from .models import HealthResponse

logger = Logger(UTC=True)


class HealthService:
    """Reports whether the database answers a trivial query."""

    def __init__(self, metadata: ImageMetadataRepository | None = None) -> None:
        self._metadata = metadata

    def check(self) -> HealthResponse:
        # The store is built lazily so a missing DATABASE_URL reports as unhealthy.
        try:
            metadata = self._metadata or build_metadata()
            metadata.ping()
        except StorageError as exc:
            logger.error(
                "Health check failed",
                extra={"error": exc.message, "details": exc.details},
            )
            return HealthResponse(
                status="unhealthy",
                database="disconnected",
                error=exc.details.get("reason", exc.message),
                timestamp=utc_now_iso(),
            )
        except (RuntimeError, SQLAlchemyError) as exc:
            # Missing or malformed DATABASE_URL.
            logger.error("Health check failed", extra={"error": str(exc)})
            return HealthResponse(
                status="unhealthy",
                database="disconnected",
                error=str(exc),
                timestamp=utc_now_iso(),
            )

        return HealthResponse(status="healthy", database="connected", timestamp=utc_now_iso())
