"""Filesystem-backed blob storage."""

import asyncio
import os
from pathlib import Path

from common.logging_config import get_logger
from controller.exceptions import StorageError
from controller.storage.base_storage import BlobStorage, StoredBlob

logger = get_logger(__name__)


class LocalBlobStorage(BlobStorage):
    """
    Stores each blob as a file under a root directory, using the storage
    key as the relative path. Content types are not persisted.
    """

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def _resolve_key(self, key: str, operation: str) -> Path:
        """
        Map a storage key to a path inside the root directory.

        Raises:
            StorageError: If the key escapes the root directory
        """
        path = (self.root / key).resolve()
        try:
            path.relative_to(self.root)
        except ValueError:
            raise StorageError(f"Storage key escapes storage root: {key}", key=key, operation=operation)
        if path == self.root:
            raise StorageError("Storage key is empty", key=key, operation=operation)
        return path

    def _write_exclusive(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # 'xb' fails if the file already exists
        with open(path, 'xb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

    async def put(self, key: str, data: bytes, content_type: str) -> StoredBlob:
        path = self._resolve_key(key, "put")
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._write_exclusive, path, data)
        except FileExistsError:
            raise StorageError(f"Blob already exists: {key}", key=key, operation="put")
        except OSError as e:
            logger.error(f"Blob write failed [key={key}]: {e}")
            raise StorageError(f"Blob write failed: {e}", key=key, operation="put") from e

        logger.debug(f"Stored blob [key={key}] [size={len(data)}]")
        return StoredBlob(key=key, size=len(data), content_type=content_type)

    async def delete(self, key: str) -> bool:
        path = self._resolve_key(key, "delete")
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, path.unlink)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Blob delete failed: {e}", key=key, operation="delete") from e
        logger.debug(f"Deleted blob [key={key}]")
        return True

    async def exists(self, key: str) -> bool:
        path = self._resolve_key(key, "exists")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, path.is_file)

    def is_available(self) -> bool:
        """Check that the root directory exists or can be created and is writable."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.root, os.W_OK)
