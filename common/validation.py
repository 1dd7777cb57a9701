"""Upload validation rules shared by the client and the controller."""

from pathlib import PurePosixPath

from common.constants import ALLOWED_EXTENSION, MAX_FILE_SIZE_BYTES
from common.exceptions import InstructScanError


class FileValidationError(InstructScanError):
    """
    Raised when an upload candidate violates a validation rule.
    """
    pass


def get_extension(file_name: str) -> str:
    """
    Return the lower-cased extension of a file name, or '' if it has none.

    Backslashes are treated as separators so Windows-style paths resolve to
    their basename.
    """
    return PurePosixPath(file_name.replace("\\", "/")).suffix.lower()


def validate_file(file_name: str, size_bytes: int) -> None:
    """
    Validate an upload candidate.

    Rules are checked in order and the first failure wins:
    extension, size ceiling, emptiness.

    Args:
        file_name: Original file name
        size_bytes: Length of the file content in bytes

    Raises:
        FileValidationError: If any rule is violated
    """
    ext = get_extension(file_name)
    if ext != ALLOWED_EXTENSION:
        raise FileValidationError(
            f"Only .py files are allowed. Received: {ext or 'no extension'}"
        )

    if size_bytes > MAX_FILE_SIZE_BYTES:
        raise FileValidationError(
            f"File size exceeds 5 MB limit. Received: {size_bytes / (1024 * 1024):.2f} MB"
        )

    if size_bytes == 0:
        raise FileValidationError("File is empty")
