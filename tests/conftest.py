"""
Pytest configuration and fixtures for the SVG image service tests.
Provides a throwaway SQLite database, an uploads directory and
storage backend selection with proper cleanup.
"""

import os

# Handler modules check for DATABASE_URL at import time; tests point it at a
# per-test SQLite file through the ``database_url`` fixture.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "svg-image-service-tests")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "SvgImageServiceTests")

from collections.abc import Callable, Iterator  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest  # noqa: E402

from core.infrastructure.adapters.database_adapter import (  # noqa: E402
    DatabaseAdapter,
    get_engine,
)
from core.infrastructure.adapters.filesystem_adapter import FilesystemAdapter  # noqa: E402
from core.infrastructure.local.filesystem_storage import FilesystemImageStorage  # noqa: E402
from core.infrastructure.sql.inline_storage import InlineImageStorage  # noqa: E402
from core.infrastructure.sql.sql_metadata import SqlImageMetadata  # noqa: E402

SAMPLE_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
    b'<rect width="10" height="10" fill="red"/></svg>'
)


@pytest.fixture
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """
    Point DATABASE_URL at a fresh SQLite file.

    Cleanup Strategy:
    - The cached engine is dropped before and after each test
    - The database file lives in tmp_path and disappears with it
    """
    url = f"sqlite:///{tmp_path / 'images.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    get_engine.cache_clear()

    yield url

    get_engine.cache_clear()


@pytest.fixture
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "uploads"
    monkeypatch.setenv("UPLOAD_DIR", str(path))
    return path


@pytest.fixture
def inline_backend(monkeypatch: pytest.MonkeyPatch, database_url: str) -> str:
    monkeypatch.setenv("STORAGE_BACKEND", "inline")
    return "inline"


@pytest.fixture
def filesystem_backend(
    monkeypatch: pytest.MonkeyPatch,
    database_url: str,
    upload_dir: Path,
) -> str:
    monkeypatch.setenv("STORAGE_BACKEND", "filesystem")
    return "filesystem"


@pytest.fixture(params=["inline", "filesystem"])
def storage_backend(
    request: pytest.FixtureRequest,
    monkeypatch: pytest.MonkeyPatch,
    database_url: str,
    upload_dir: Path,
) -> str:
    """Run the test once per storage backend."""
    monkeypatch.setenv("STORAGE_BACKEND", request.param)
    return str(request.param)


@pytest.fixture
def inline_adapter(database_url: str) -> DatabaseAdapter:
    return DatabaseAdapter(inline=True)


@pytest.fixture
def narrow_adapter(database_url: str) -> DatabaseAdapter:
    return DatabaseAdapter(inline=False)


@pytest.fixture
def inline_storage(inline_adapter: DatabaseAdapter) -> InlineImageStorage:
    return InlineImageStorage(inline_adapter)


@pytest.fixture
def inline_metadata(inline_adapter: DatabaseAdapter) -> SqlImageMetadata:
    return SqlImageMetadata(inline_adapter, inline=True)


@pytest.fixture
def filesystem_adapter(upload_dir: Path) -> FilesystemAdapter:
    return FilesystemAdapter(upload_dir)


@pytest.fixture
def filesystem_storage(filesystem_adapter: FilesystemAdapter) -> FilesystemImageStorage:
    return FilesystemImageStorage(filesystem_adapter)


@pytest.fixture
def filesystem_metadata(narrow_adapter: DatabaseAdapter) -> SqlImageMetadata:
    return SqlImageMetadata(narrow_adapter, inline=False)


@pytest.fixture
def sample_svg() -> bytes:
    """Small, well-formed SVG document."""
    return SAMPLE_SVG


@pytest.fixture
def svg_of_size() -> Callable[[int], bytes]:
    """
    Helper producing SVG markup padded to an exact byte length.

    Usage:
        data = svg_of_size(1024)
    """

    def _build(size: int) -> bytes:
        head = b'<svg xmlns="http://www.w3.org/2000/svg"><!--'
        tail = b"--></svg>"
        return head + b"x" * (size - len(head) - len(tail)) + tail

    return _build


@pytest.fixture
def multipart_body() -> Callable[..., tuple[bytes, str]]:
    """
    Helper to encode a multipart/form-data body.

    Usage:
        body, content_type = multipart_body(
            files=[("image", "a.svg", svg_bytes, "image/svg+xml")],
            fields={"note": "hello"},
        )
    """

    def _build(
        *,
        files: list[tuple[str, str, bytes, str | None]],
        fields: dict[str, str] | None = None,
        boundary: str = "----svg-image-service-test",
    ) -> tuple[bytes, str]:
        body = b""

        for name, value in (fields or {}).items():
            body += (
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
                f"{value}\r\n"
            ).encode("utf-8")

        for field_name, filename, content, content_type in files:
            part_headers = (
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"\r\n'
            )
            if content_type:
                part_headers += f"Content-Type: {content_type}\r\n"
            body += (part_headers + "\r\n").encode("utf-8") + content + b"\r\n"

        body += f"--{boundary}--\r\n".encode("utf-8")
        return body, f"multipart/form-data; boundary={boundary}"

    return _build
