"""File service for business logic."""

import uuid
from pathlib import PurePosixPath

from common.constants import PYTHON_CONTENT_TYPE
from common.logging_config import get_logger
from common.validation import validate_file
from controller.exceptions import MetadataError, StorageError
from controller.repositories.file_repository import FileMetadataStore, FileRecord
from controller.storage.base_storage import BlobStorage

logger = get_logger(__name__)


MAX_KEY_SEGMENT_BYTES = 255


def build_storage_key(owner_id: str, file_id: str, file_name: str) -> str:
    """
    Build the storage key for an upload: {owner_id}/{file_id}_{basename}.

    The last segment is kept within MAX_KEY_SEGMENT_BYTES of UTF-8 by
    shortening the stem of long basenames; the extension is preserved.
    """
    basename = PurePosixPath(file_name.replace("\\", "/")).name
    prefix = f"{file_id}_"
    segment = f"{prefix}{basename}"
    if len(segment.encode("utf-8")) <= MAX_KEY_SEGMENT_BYTES:
        return f"{owner_id}/{segment}"

    suffix = PurePosixPath(basename).suffix
    stem = basename[:len(basename) - len(suffix)]
    budget = MAX_KEY_SEGMENT_BYTES - len(prefix.encode("utf-8")) - len(suffix.encode("utf-8"))
    stem = stem.encode("utf-8")[:max(budget, 0)].decode("utf-8", "ignore")
    return f"{owner_id}/{prefix}{stem}{suffix}"


class FileService:
    """
    Upload orchestrator.

    The blob is always written before the metadata record, and removed
    again if the record cannot be written, so an orphaned blob is the only
    possible leftover of a failed upload.
    """

    def __init__(self, storage: BlobStorage, metadata: FileMetadataStore):
        self.storage = storage
        self.metadata = metadata

    async def ingest(self, owner_id: str, file_name: str, data: bytes) -> FileRecord:
        """
        Validate, store and record an uploaded file.

        Args:
            owner_id: Authenticated user the file belongs to
            file_name: Original file name as sent by the client
            data: File content

        Returns:
            The persisted FileRecord

        Raises:
            FileValidationError: If the file violates a validation rule
            StorageError: If the blob could not be stored
            MetadataError: If the record could not be written (blob rolled back)
        """
        validate_file(file_name, len(data))

        file_id = str(uuid.uuid4())
        storage_key = build_storage_key(owner_id, file_id, file_name)

        try:
            await self.storage.put(storage_key, data, PYTHON_CONTENT_TYPE)
        except StorageError:
            logger.error(f"Storage upload failed [file_id={file_id}] [key={storage_key}]", exc_info=True)
            raise

        logger.info(f"Stored blob [file_id={file_id}] [key={storage_key}] [size={len(data)}]")

        try:
            record = self.metadata.insert(
                file_id=file_id,
                user_id=owner_id,
                file_name=file_name,
                storage_path=storage_key,
                size_bytes=len(data),
            )
        except MetadataError:
            logger.error(f"Metadata write failed, rolling back blob [file_id={file_id}]", exc_info=True)
            await self._rollback_blob(storage_key)
            raise

        logger.info(f"Upload complete [file_id={file_id}] [user_id={owner_id}]")
        return record

    async def _rollback_blob(self, storage_key: str) -> None:
        """
        Best-effort removal of a blob whose metadata write failed.
        A failing delete is logged, never raised.
        """
        try:
            await self.storage.delete(storage_key)
        except StorageError as e:
            logger.warning(f"Rollback delete failed, blob orphaned [key={storage_key}]: {e}")
            return
        logger.info(f"Rolled back blob [key={storage_key}]")
