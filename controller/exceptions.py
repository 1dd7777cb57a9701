"""Custom exception classes for the Controller."""

from typing import Optional

from common.exceptions import InstructScanError


class AuthenticationError(InstructScanError):
    """
    Raised when the bearer credential is missing, malformed, invalid or expired.
    """
    pass


class NoFileProvidedError(InstructScanError):
    """
    Raised when an upload request carries no file part.
    """
    pass


class UnsupportedFileTypeError(InstructScanError):
    """
    Raised by the transport filter when the uploaded file is not a .py file.
    """
    pass


class FileTooLargeError(InstructScanError):
    """
    Raised by the transport filter when the upload exceeds the size limit.
    """
    pass


class StorageError(InstructScanError):
    """
    Raised by a blob storage backend when a put or delete fails.
    """

    def __init__(self, message: str, key: str, operation: str):
        super().__init__(message)
        self.key = key
        self.operation = operation


class MetadataError(InstructScanError):
    """
    Raised by a metadata store when a record cannot be written or read.
    """

    def __init__(self, message: str, file_id: Optional[str] = None):
        super().__init__(message)
        self.file_id = file_id
