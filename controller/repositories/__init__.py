"""Repository layer for data access."""

from controller.repositories.file_repository import FileMetadataStore, FileRecord, FileRepository

__all__ = [
    "FileMetadataStore",
    "FileRecord",
    "FileRepository",
]
