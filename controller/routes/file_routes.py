"""File upload API routes."""

from typing import Optional, Union

from fastapi import APIRouter, Depends, File, UploadFile, status

from controller.auth import AuthenticatedUser, get_current_user
from controller.schemas.common import ErrorResponse
from controller.schemas.files import FileUploadResponse
from controller.service_locator import get_file_service
from controller.services.file_service import FileService
from controller.upload_filter import read_python_upload

router = APIRouter(prefix="/api/files", tags=["Files"])


@router.post(
    "",
    response_model=FileUploadResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_file(
    file: Optional[Union[UploadFile, str]] = File(None),
    current_user: AuthenticatedUser = Depends(get_current_user),
    file_service: FileService = Depends(get_file_service),
):
    """
    Upload a Python source file.

    Parameters:
        - file: .py file to upload (multipart/form-data)
        - Authorization header: Bearer <jwt> (required)

    Returns:
        - id: UUID of the stored file
        - fileName: Original filename
        - sizeBytes: File size in bytes
        - uploadedAt: Server-assigned timestamp

    Raises:
        - 400: No file provided, or file failed validation
        - 401: Missing, invalid or expired token
        - 413: File larger than 5 MB
        - 422: Not a .py file
        - 500: Storage or metadata failure
    """
    candidate = await read_python_upload(file)

    record = await file_service.ingest(
        owner_id=current_user.user_id,
        file_name=candidate.file_name,
        data=candidate.data,
    )

    return FileUploadResponse.from_record(record)
