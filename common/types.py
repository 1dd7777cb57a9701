"""Shared data type definitions."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class FileDescriptor:
    """
    Normalized description of a stored file as returned by the API.
    """
    id: str
    file_name: str
    size_bytes: int
    uploaded_at: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "FileDescriptor":
        return cls(
            id=data["id"],
            file_name=data["fileName"],
            size_bytes=data["sizeBytes"],
            uploaded_at=data["uploadedAt"],
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fileName": self.file_name,
            "sizeBytes": self.size_bytes,
            "uploadedAt": self.uploaded_at,
        }
