"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class UploadCommand:
    """Upload a local .py file."""

    path: str
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class FilesCommand:
    """List files uploaded in this session."""

    command: Literal["files"] = "files"


@dataclass(frozen=True)
class SelectCommand:
    """Select an uploaded file by id."""

    file_id: str
    command: Literal["select"] = "select"


@dataclass(frozen=True)
class StatusCommand:
    """Show the upload state."""

    command: Literal["status"] = "status"


@dataclass(frozen=True)
class ResetCommand:
    """Return a finished upload to idle."""

    command: Literal["reset"] = "reset"


@dataclass(frozen=True)
class TokenCommand:
    """Store the bearer token."""

    token: str
    command: Literal["token"] = "token"


CommandRequest = (
    UploadCommand
    | FilesCommand
    | SelectCommand
    | StatusCommand
    | ResetCommand
    | TokenCommand
)
