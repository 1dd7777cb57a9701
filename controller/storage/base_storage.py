"""Blob storage interface used by the upload orchestrator."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredBlob:
    """Result of a successful put."""
    key: str
    size: int
    content_type: str


class BlobStorage(ABC):
    """
    Opaque key/blob store.

    Implementations must translate backend failures into
    controller.exceptions.StorageError so callers never see
    backend-specific exception types.
    """

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> StoredBlob:
        """
        Store data under key. Never overwrites an existing key.

        Raises:
            StorageError: If the key already exists or the write fails
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete the blob stored under key.

        Returns:
            True if a blob was removed, False if none existed

        Raises:
            StorageError: If the delete fails
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether a blob is stored under key."""
