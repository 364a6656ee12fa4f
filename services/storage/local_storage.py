import logging
import os
from pathlib import Path
from urllib.parse import unquote, urlparse

from services.errors import TransferError
from .base import ObjectStorage

logger = logging.getLogger(__name__)


class LocalObjectStorage(ObjectStorage):
    """Filesystem-based replacement for S3."""

    def __init__(self, base_dir: str = "local_storage", bucket: str = "lms-submissions", prefix: str = "submissions"):
        self.base_dir = Path(base_dir)
        self.bucket = bucket
        self.prefix = prefix
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.base_dir / self.bucket / key

    def store(self, name: str, data: bytes, mime_type: str | None = None) -> str:
        key = self._object_key(self.prefix, name)
        file_path = self._path(key)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error(f"[LOCAL] Failed to store {name}: {e}")
            raise TransferError(f"Could not store {name}: {e}") from e

        logger.info(f"[LOCAL] Stored {len(data)} bytes → {file_path}")
        return file_path.resolve().as_uri()

    def read(self, location: str) -> bytes:
        """Return the bytes behind a `file://` location from `store`."""
        parsed = urlparse(location)
        path = unquote(parsed.path) if parsed.scheme == "file" else location
        if not os.path.exists(path):
            raise TransferError(f"Local object {location} not found")
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise TransferError(f"Could not read {location}: {e}") from e
