"""Object storage interface for uploaded submission files."""

import abc
from uuid import uuid4


class ObjectStorage(abc.ABC):
    """Stores file bytes under a name and returns a location URI."""

    @abc.abstractmethod
    def store(self, name: str, data: bytes, mime_type: str | None = None) -> str:
        """Store `data` as `name`; return its location. Raises TransferError."""
        raise NotImplementedError()

    def _object_key(self, prefix: str, name: str) -> str:
        """Key under a fresh unique folder so equal names never collide."""
        safe_name = name.replace("/", "_")
        if safe_name in ("", ".", ".."):
            safe_name = "upload"
        parts = [p for p in (prefix.strip("/"), uuid4().hex, safe_name) if p]
        return "/".join(parts)
