"""File metadata repository."""

import sqlite3
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from common.logging_config import get_logger
from controller.database import get_db_connection
from controller.exceptions import MetadataError

logger = get_logger(__name__)


@dataclass(frozen=True)
class FileRecord:
    id: str
    user_id: str
    file_name: str
    storage_path: str
    size_bytes: int
    uploaded_at: str


class FileMetadataStore(ABC):
    """
    Row store for file metadata.

    Implementations raise controller.exceptions.MetadataError for every
    backend failure.
    """

    @abstractmethod
    def insert(
        self,
        file_id: str,
        user_id: str,
        file_name: str,
        storage_path: str,
        size_bytes: int,
    ) -> FileRecord:
        """Insert a record and return it with the store-assigned timestamp."""

    @abstractmethod
    def get(self, file_id: str) -> Optional[FileRecord]:
        """Fetch a record by id, or None if absent."""


def _row_to_record(row: sqlite3.Row) -> FileRecord:
    return FileRecord(
        id=row["id"],
        user_id=row["user_id"],
        file_name=row["file_name"],
        storage_path=row["storage_path"],
        size_bytes=row["size_bytes"],
        uploaded_at=row["uploaded_at"],
    )


class FileRepository(FileMetadataStore):
    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def insert(
        self,
        file_id: str,
        user_id: str,
        file_name: str,
        storage_path: str,
        size_bytes: int,
    ) -> FileRecord:
        try:
            with get_db_connection(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO files (id, user_id, file_name, storage_path, size_bytes)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (file_id, user_id, file_name, storage_path, size_bytes)
                )
                cursor.execute(
                    "SELECT id, user_id, file_name, storage_path, size_bytes, uploaded_at FROM files WHERE id = ?",
                    (file_id,)
                )
                row = cursor.fetchone()
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to insert file record [file_id={file_id}]: {e}", exc_info=True)
            raise MetadataError(f"Database insert failed: {e}", file_id=file_id) from e

        logger.info(f"File record created [file_id={file_id}] [user_id={user_id}]")
        return _row_to_record(row)

    def get(self, file_id: str) -> Optional[FileRecord]:
        try:
            with get_db_connection(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT id, user_id, file_name, storage_path, size_bytes, uploaded_at FROM files WHERE id = ?",
                    (file_id,)
                )
                row = cursor.fetchone()
        except sqlite3.Error as e:
            raise MetadataError(f"Database query failed: {e}", file_id=file_id) from e

        if row is None:
            return None
        return _row_to_record(row)

    def is_available(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            with get_db_connection(self.db_path) as conn:
                conn.execute("SELECT 1 FROM files LIMIT 1")
        except sqlite3.Error:
            return False
        return True
