"""Thin adapter for interacting with the local uploads directory."""

import os
from pathlib import Path, PurePosixPath
import tempfile

from core.utils.constants import DEFAULT_UPLOAD_DIR, ENV_UPLOAD_DIR

TEMP_PREFIX = ".upload-"


class FilesystemAdapter:
    """Low-level file operations (mechanical, no error handling).

    This adapter:
    - Keeps every file flat inside one root directory
    - Does NOT handle errors (lets OSError bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, root: str | Path | None = None) -> None:
        """Resolve the uploads directory and create it if absent."""
        self._root = Path(root or os.getenv(ENV_UPLOAD_DIR) or DEFAULT_UPLOAD_DIR)
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        """Map a key to a path directly under the root.

        Raises:
            ValueError: If the key does not name a plain file
        """
        name = PurePosixPath(key.replace("\\", "/")).name
        if not name or name in {".", ".."} or name != key:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._root / name

    def write_bytes(self, key: str, data: bytes) -> None:
        """Write through a temporary file so readers never see partial content."""
        target = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=TEMP_PREFIX)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def read_bytes(self, key: str) -> bytes:
        return self.path_for(key).read_bytes()

    def stat(self, key: str) -> os.stat_result:
        return self.path_for(key).stat()

    def delete(self, key: str) -> None:
        self.path_for(key).unlink()

    def list_keys(self) -> list[str]:
        """Names of regular files under the root, skipping in-progress writes."""
        return sorted(
            entry.name
            for entry in self._root.iterdir()
            if entry.is_file() and not entry.name.startswith(TEMP_PREFIX)
        )
