"""Pydantic schemas for file upload endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from controller.repositories.file_repository import FileRecord


class FileUploadResponse(BaseModel):
    """Response model for file upload, serialized in camelCase."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    file_name: str = Field(alias="fileName")
    size_bytes: int = Field(alias="sizeBytes")
    uploaded_at: str = Field(alias="uploadedAt")

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileUploadResponse":
        return cls(
            id=record.id,
            file_name=record.file_name,
            size_bytes=record.size_bytes,
            uploaded_at=record.uploaded_at,
        )
