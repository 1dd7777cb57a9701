"""Shared pytest fixtures for all tests."""

import itertools
from typing import Dict, List, Optional

import pytest

from cli.config import Config
from controller.database import init_database
from controller.exceptions import MetadataError, StorageError
from controller.repositories.file_repository import FileMetadataStore, FileRecord
from controller.storage.base_storage import BlobStorage, StoredBlob


class InMemoryBlobStorage(BlobStorage):
    """
    Dict-backed blob storage. Set fail_put / fail_delete to simulate
    backend failures.
    """

    def __init__(self):
        self.blobs: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.deleted: List[str] = []
        self.fail_put = False
        self.fail_delete = False

    async def put(self, key: str, data: bytes, content_type: str) -> StoredBlob:
        if self.fail_put:
            raise StorageError("simulated put failure", key=key, operation="put")
        if key in self.blobs:
            raise StorageError(f"Blob already exists: {key}", key=key, operation="put")
        self.blobs[key] = data
        self.content_types[key] = content_type
        return StoredBlob(key=key, size=len(data), content_type=content_type)

    async def delete(self, key: str) -> bool:
        self.deleted.append(key)
        if self.fail_delete:
            raise StorageError("simulated delete failure", key=key, operation="delete")
        return self.blobs.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return key in self.blobs


class InMemoryMetadataStore(FileMetadataStore):
    """Dict-backed metadata store with deterministic timestamps."""

    def __init__(self):
        self.records: Dict[str, FileRecord] = {}
        self.fail_insert = False
        self._clock = itertools.count(1)

    def insert(self, file_id, user_id, file_name, storage_path, size_bytes) -> FileRecord:
        if self.fail_insert:
            raise MetadataError("simulated insert failure", file_id=file_id)
        record = FileRecord(
            id=file_id,
            user_id=user_id,
            file_name=file_name,
            storage_path=storage_path,
            size_bytes=size_bytes,
            uploaded_at=f"2026-01-01T00:00:{next(self._clock):02d}.000Z",
        )
        self.records[file_id] = record
        return record

    def get(self, file_id: str) -> Optional[FileRecord]:
        return self.records.get(file_id)


@pytest.fixture
def blob_storage():
    return InMemoryBlobStorage()


@pytest.fixture
def metadata_store():
    return InMemoryMetadataStore()


@pytest.fixture
def test_db(tmp_path, monkeypatch):
    """
    Create a temporary SQLite database and point the controller at it.
    """
    db_path = tmp_path / "test.db"
    monkeypatch.setattr("controller.database.DATABASE_PATH", str(db_path))
    init_database()
    return db_path


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.
    """
    config_dir = tmp_path / '.instructscan'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.
    """
    config = Config(temp_config_dir / 'config.json')
    config.data['token'] = None
    config.data['api_base_url'] = 'http://test'
    return config


@pytest.fixture
def sample_py_file(tmp_path):
    """
    Create a small Python source file for upload tests.
    """
    file_path = tmp_path / 'main.py'
    file_path.write_text('print("hello")\n')
    return file_path
