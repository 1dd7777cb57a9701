"""Pydantic schemas for API responses."""

from controller.schemas.files import FileUploadResponse
from controller.schemas.common import ErrorResponse

__all__ = [
    "FileUploadResponse",
    "ErrorResponse",
]
