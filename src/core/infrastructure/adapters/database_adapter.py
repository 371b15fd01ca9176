"""Thin adapter for interacting with the relational database."""

from functools import lru_cache
import os
from typing import Protocol

from aws_lambda_powertools import Logger
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import RowMapping
from sqlalchemy.sql import Executable

from core.infrastructure.sql.schema import initialize_schema
from core.utils.constants import ENV_DATABASE_URL

logger = Logger(UTC=True)


class DatabaseAdapterProtocol(Protocol):
    """Minimal database adapter protocol (repository-facing)."""

    @property
    def dialect_name(self) -> str: ...

    def fetch_one(self, statement: Executable) -> RowMapping | None: ...

    def fetch_all(self, statement: Executable) -> list[RowMapping]: ...

    def execute(self, statement: Executable) -> int: ...

    def execute_returning(self, statement: Executable) -> list[RowMapping]: ...

    def ping(self) -> None: ...


def normalize_database_url(url: str) -> str:
    """Select the psycopg driver for bare PostgreSQL URLs.

    Hosted Postgres providers hand out ``postgres://`` or ``postgresql://``
    connection strings; SQLAlchemy needs the driver spelled out.
    """
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://") :]

    if url.startswith("postgresql://"):
        url = "postgresql+psycopg://" + url[len("postgresql://") :]

    return url


@lru_cache(maxsize=None)
def get_engine(database_url: str, *, inline: bool) -> Engine:
    """Create the pooled engine for ``database_url`` once per container.

    Schema initialization runs here, so it happens on cold start only.
    """
    engine = create_engine(
        normalize_database_url(database_url),
        pool_pre_ping=True,
    )
    initialize_schema(engine, inline=inline)
    return engine


class DatabaseAdapter:
    """Low-level SQL operations (mechanical, no error handling).

    This adapter:
    - Wraps a shared SQLAlchemy engine
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, *, inline: bool = True, database_url: str | None = None) -> None:
        """Resolve the engine from environment configuration."""
        url = database_url or os.getenv(ENV_DATABASE_URL)
        if not url:
            raise RuntimeError(f"{ENV_DATABASE_URL} environment variable is not set")

        self._engine = get_engine(url, inline=inline)

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    def fetch_one(self, statement: Executable) -> RowMapping | None:
        """Run a query and return the first row, if any."""
        with self._engine.connect() as conn:
            return conn.execute(statement).mappings().first()

    def fetch_all(self, statement: Executable) -> list[RowMapping]:
        """Run a query and return every row."""
        with self._engine.connect() as conn:
            return list(conn.execute(statement).mappings().all())

    def execute(self, statement: Executable) -> int:
        """Run a write statement in its own transaction and return the rowcount."""
        with self._engine.begin() as conn:
            result = conn.execute(statement)
            return result.rowcount

    def execute_returning(self, statement: Executable) -> list[RowMapping]:
        """Run a write statement with a RETURNING clause."""
        with self._engine.begin() as conn:
            return list(conn.execute(statement).mappings().all())

    def ping(self) -> None:
        """Round-trip a trivial query."""
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))
