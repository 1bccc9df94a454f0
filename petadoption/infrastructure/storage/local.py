from __future__ import annotations

import logging
from pathlib import Path

from petadoption.application.errors import InfrastructureError
from petadoption.infrastructure.storage.ports import StorageService

logger = logging.getLogger(__name__)


class LocalStorageService(StorageService):
    """Stores uploads on disk below ``root``; served back under ``url_prefix``."""

    def __init__(self, root: str | Path, url_prefix: str = "/uploads") -> None:
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise InfrastructureError("Invalid storage key", details={"key": key})
        return path

    async def put_object(self, key: str, data: bytes, content_type: str) -> None:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            logger.error("Failed to store upload %s: %s", key, exc)
            raise InfrastructureError("Failed to store uploaded file") from exc

    async def get_public_url(self, key: str) -> str:
        return f"{self.url_prefix}/{key}"

    async def delete_object(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Failed to delete upload %s: %s", key, exc)
            raise InfrastructureError("Failed to delete stored file") from exc
