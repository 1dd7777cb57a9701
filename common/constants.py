"""Project-wide constants shared by the controller and the client."""

MAX_FILE_SIZE_BYTES: int = 5 * 1024 * 1024  # 5 MiB, inclusive
ALLOWED_EXTENSION: str = ".py"
PYTHON_CONTENT_TYPE: str = "text/x-python"
UPLOAD_FIELD_NAME: str = "file"
UPLOAD_ENDPOINT: str = "/api/files"
