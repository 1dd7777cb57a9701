"""Blob storage port and its backends."""

from controller.storage.base_storage import BlobStorage, StoredBlob
from controller.storage.local_storage import LocalBlobStorage

__all__ = [
    "BlobStorage",
    "StoredBlob",
    "LocalBlobStorage",
]
