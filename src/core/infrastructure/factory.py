"""Builds the configured storage backend and metadata store.

``STORAGE_BACKEND`` selects where image bytes live:

- ``inline`` (default): SVG text in the ``content`` column of the images table
- ``filesystem``: files in ``UPLOAD_DIR``, metadata rows in the images table

Both variants need ``DATABASE_URL``. Importing this module checks for it.
"""

import os

from aws_lambda_powertools import Logger

from core.infrastructure.adapters.database_adapter import DatabaseAdapter
from core.infrastructure.local.filesystem_storage import FilesystemImageStorage
from core.infrastructure.sql.inline_storage import InlineImageStorage
from core.infrastructure.sql.sql_metadata import SqlImageMetadata
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DEFAULT_STORAGE_BACKEND,
    ENV_DATABASE_URL,
    ENV_ENVIRONMENT,
    ENV_STORAGE_BACKEND,
    PRODUCTION_ENVIRONMENT,
    STORAGE_BACKEND_FILESYSTEM,
    STORAGE_BACKEND_INLINE,
)

logger = Logger(UTC=True)

STORAGE_BACKENDS = (STORAGE_BACKEND_INLINE, STORAGE_BACKEND_FILESYSTEM)


def storage_backend_name() -> str:
    """Return the configured backend name.

    Raises:
        RuntimeError: If ``STORAGE_BACKEND`` names an unknown backend
    """
    name = (os.getenv(ENV_STORAGE_BACKEND) or DEFAULT_STORAGE_BACKEND).strip().lower()
    if name not in STORAGE_BACKENDS:
        raise RuntimeError(
            f"Unknown {ENV_STORAGE_BACKEND} '{name}'. "
            f"Expected one of: {', '.join(STORAGE_BACKENDS)}"
        )
    return name


def is_inline() -> bool:
    return storage_backend_name() == STORAGE_BACKEND_INLINE


def build_storage() -> ImageStorageRepository:
    if is_inline():
        return InlineImageStorage(DatabaseAdapter(inline=True))
    return FilesystemImageStorage()


def build_metadata() -> ImageMetadataRepository:
    inline = is_inline()
    return SqlImageMetadata(DatabaseAdapter(inline=inline), inline=inline)


def check_database_url() -> None:
    """Refuse to start without ``DATABASE_URL`` outside production.

    In production the problem is only logged; every request that needs the
    database then fails with a 500 instead of the whole function failing to
    initialize.
    """
    if os.getenv(ENV_DATABASE_URL):
        return

    if os.getenv(ENV_ENVIRONMENT) == PRODUCTION_ENVIRONMENT:
        logger.error(f"{ENV_DATABASE_URL} environment variable is not set")
        return

    raise RuntimeError(f"{ENV_DATABASE_URL} environment variable is required")


check_database_url()
