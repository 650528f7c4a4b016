"""
Photo files kept in a directory on disk.

Stored names are ``<upload time in ms>-<original filename>``. Two uploads
of the same filename within one millisecond would collide; that risk is
accepted rather than deduplicated.
"""

import logging
import os
import time
from pathlib import Path
from typing import Optional

from inventory_api.errors import NotFoundError

logger = logging.getLogger(__name__)


class PhotoStore:
    """Directory-backed storage for device photos."""

    def __init__(self, directory: str) -> None:
        self.directory = Path(directory).resolve()

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, filename: str) -> Path:
        # Stored names never contain directories
        return self.directory / os.path.basename(filename)

    def save(self, content: bytes, original_filename: Optional[str]) -> str:
        """Write an upload and return the generated filename."""
        self.ensure_directory()

        original = os.path.basename(original_filename or "") or "upload"
        filename = f"{int(time.time() * 1000)}-{original}"
        self._path(filename).write_bytes(content)

        logger.info(f"Stored photo {filename} ({len(content)} bytes)")
        return filename

    def exists(self, filename: Optional[str]) -> bool:
        return bool(filename) and self._path(filename).is_file()

    def resolve(self, filename: Optional[str]) -> Path:
        """Absolute path of a stored photo, or NotFoundError if absent."""
        if not self.exists(filename):
            raise NotFoundError("File not found")
        return self._path(filename)

    def delete(self, filename: Optional[str]) -> None:
        """Remove a stored photo. Missing files are ignored."""
        if not self.exists(filename):
            return

        self._path(filename).unlink(missing_ok=True)
        logger.info(f"Deleted photo {filename}")
