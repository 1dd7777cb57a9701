"""Dependency providers wiring the upload service to its backends."""

from fastapi import Depends

from controller.config import STORAGE_PATH
from controller.repositories.file_repository import FileMetadataStore, FileRepository
from controller.services.file_service import FileService
from controller.storage.base_storage import BlobStorage
from controller.storage.local_storage import LocalBlobStorage


def get_blob_storage() -> BlobStorage:
    """Blob storage backend for the current request."""
    return LocalBlobStorage(STORAGE_PATH)


def get_metadata_store() -> FileMetadataStore:
    """Metadata store for the current request."""
    return FileRepository()


def get_file_service(
    storage: BlobStorage = Depends(get_blob_storage),
    metadata: FileMetadataStore = Depends(get_metadata_store),
) -> FileService:
    """Upload orchestrator bound to the configured backends."""
    return FileService(storage=storage, metadata=metadata)
