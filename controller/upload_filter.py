"""Transport-level filtering of multipart uploads."""

from dataclasses import dataclass
from typing import Optional, Union

from starlette.datastructures import UploadFile

from common.constants import ALLOWED_EXTENSION, MAX_FILE_SIZE_BYTES
from common.validation import get_extension
from controller.exceptions import FileTooLargeError, NoFileProvidedError, UnsupportedFileTypeError

READ_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class UploadCandidate:
    file_name: str
    data: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.data)


async def read_python_upload(
    file: Optional[Union[UploadFile, str]],
    max_size: int = MAX_FILE_SIZE_BYTES,
) -> UploadCandidate:
    """
    Accept a multipart file part if it looks like a Python source file and
    fits the size limit. The body is read incrementally and abandoned as
    soon as it exceeds max_size.

    Raises:
        NoFileProvidedError: If no named file part was sent (absent, a plain
            form field, or an empty filename)
        UnsupportedFileTypeError: If the file name does not end in .py
        FileTooLargeError: If the content exceeds max_size bytes
    """
    if not isinstance(file, UploadFile) or not file.filename:
        raise NoFileProvidedError("No file provided")

    if get_extension(file.filename) != ALLOWED_EXTENSION:
        raise UnsupportedFileTypeError("Only .py files are allowed")

    buffer = bytearray()
    while True:
        chunk = await file.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > max_size:
            raise FileTooLargeError("File size must be 5 MB or less")

    return UploadCandidate(file_name=file.filename, data=bytes(buffer))
