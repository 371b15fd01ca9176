"""Table definition and boot-time schema initialization for image metadata.

The ``images`` table is created if absent. Deployments that store SVG text
inline additionally get the ``content`` and ``mime_type`` columns added to a
table created by an older, filesystem-only release.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from aws_lambda_powertools import Logger
from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Engine,
    Integer,
    MetaData,
    Table,
    Text,
    func,
    inspect,
    text,
)
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.sql import Insert

from core.utils.constants import IMAGES_TABLE_NAME, SVG_MIME_TYPE

logger = Logger(UTC=True)

metadata = MetaData()

images_table = Table(
    IMAGES_TABLE_NAME,
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("filename", Text, unique=True, nullable=False),
    Column("original_name", Text),
    Column("size", BigInteger),
    Column("content", Text),
    Column("mime_type", Text, server_default=SVG_MIME_TYPE),
    Column("uploaded_at", DateTime(timezone=True), server_default=func.now()),
)

# Columns introduced by inline storage, with the DDL used to add them.
INLINE_COLUMNS: tuple[tuple[str, str], ...] = (
    ("content", "TEXT"),
    ("mime_type", f"TEXT DEFAULT '{SVG_MIME_TYPE}'"),
)


def initialize_schema(engine: Engine, *, inline: bool) -> bool:
    """Ensure the images table exists with the current column set.

    Safe to run on every cold start. Failures are logged and swallowed so the
    function keeps serving; individual requests will then surface database
    errors on their own.

    Returns:
        True when the schema is ready, False if initialization failed
    """
    logger.info("Connecting to database", extra={"dialect": engine.dialect.name})

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connected successfully")

        metadata.create_all(engine, checkfirst=True)

        if inline:
            add_missing_columns(engine, INLINE_COLUMNS)

    except Exception as exc:
        logger.exception(
            "Database initialization failed",
            extra={"error": str(exc), "error_type": type(exc).__name__},
        )
        return False

    logger.info("Database tables initialized", extra={"inline": inline})
    return True


def add_missing_columns(engine: Engine, columns: Iterable[tuple[str, str]]) -> list[str]:
    """Add each column that the images table does not have yet.

    Returns:
        Names of the columns that were added
    """
    existing = {column["name"] for column in inspect(engine).get_columns(IMAGES_TABLE_NAME)}
    missing = [(name, ddl) for name, ddl in columns if name not in existing]

    if not missing:
        return []

    with engine.begin() as conn:
        for name, ddl in missing:
            logger.info("Adding column to existing table", extra={"column": name})
            conn.execute(text(f"ALTER TABLE {IMAGES_TABLE_NAME} ADD COLUMN {name} {ddl}"))

    logger.info("Database schema updated", extra={"columns": [name for name, _ in missing]})
    return [name for name, _ in missing]


def build_upsert(
    dialect_name: str,
    values: Mapping[str, Any],
    *,
    update_columns: Iterable[str],
) -> Insert:
    """Build ``INSERT ... ON CONFLICT (filename) DO UPDATE`` for the images table."""
    if dialect_name == "postgresql":
        stmt = postgresql.insert(images_table).values(**values)
    elif dialect_name == "sqlite":
        stmt = sqlite.insert(images_table).values(**values)
    else:
        raise ValueError(f"Upsert is not supported for dialect '{dialect_name}'")

    return stmt.on_conflict_do_update(
        index_elements=[images_table.c.filename],
        set_={column: stmt.excluded[column] for column in update_columns},
    )
