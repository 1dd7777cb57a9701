"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.config import Config
from cli.controller_client import ControllerClient
from cli.models import (
    FilesCommand,
    ResetCommand,
    SelectCommand,
    StatusCommand,
    TokenCommand,
    UploadCommand,
)
from cli.upload_state import InvalidTransitionError
from cli.uploader import FileUploader
from cli.utils import describe_state, format_file_size

logger = get_logger(__name__)


_config: Optional[Config] = None
_uploader: Optional[FileUploader] = None


def get_config() -> Config:
    """
    Get or create global Config instance.
    """
    global _config
    if _config is None:
        _config = Config(Path.home() / '.instructscan' / 'config.json')
    return _config


def get_uploader() -> FileUploader:
    """
    Get or create the global FileUploader bound to a ControllerClient.
    """
    global _uploader
    if _uploader is None:
        logger.debug("Creating new FileUploader instance")
        _uploader = FileUploader(ControllerClient(get_config()))
    return _uploader


def handle_upload(cmd: UploadCommand, uploader: Optional[FileUploader] = None) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with the local path
        uploader: Optional FileUploader for dependency injection (testing)

    Returns:
        Description of the resulting upload state
    """
    logger.info(f"Executing upload command: path={cmd.path}")
    if uploader is None:
        uploader = get_uploader()

    path = Path(cmd.path).expanduser()
    if not path.is_file():
        return f"Error: file not found: {cmd.path}"

    try:
        data = path.read_bytes()
    except OSError as e:
        return f"Error: cannot read {cmd.path}: {e}"

    state = uploader.select_file(path.name, data)
    return describe_state(state)


def handle_files(cmd: FilesCommand, uploader: Optional[FileUploader] = None) -> str:
    """
    Handle 'files' command: list files uploaded in this session, newest first.
    """
    if uploader is None:
        uploader = get_uploader()

    if not uploader.uploaded_files:
        return "No files uploaded yet"

    lines = []
    for descriptor in uploader.uploaded_files:
        marker = "*" if descriptor.id == uploader.selected_file_id else " "
        lines.append(
            f"{marker} {descriptor.file_name}  {format_file_size(descriptor.size_bytes)}  "
            f"{descriptor.uploaded_at}  {descriptor.id}"
        )
    return "\n".join(lines)


def handle_select(cmd: SelectCommand, uploader: Optional[FileUploader] = None) -> str:
    """
    Handle 'select' command.
    """
    if uploader is None:
        uploader = get_uploader()
    try:
        descriptor = uploader.select_uploaded(cmd.file_id)
    except KeyError:
        return f"Error: no uploaded file with id {cmd.file_id}"
    return f"Selected: {descriptor.file_name}"


def handle_status(cmd: StatusCommand, uploader: Optional[FileUploader] = None) -> str:
    """
    Handle 'status' command.
    """
    if uploader is None:
        uploader = get_uploader()
    return describe_state(uploader.state)


def handle_reset(cmd: ResetCommand, uploader: Optional[FileUploader] = None) -> str:
    """
    Handle 'reset' command.
    """
    if uploader is None:
        uploader = get_uploader()
    try:
        uploader.reset()
    except InvalidTransitionError as e:
        return f"Error: {e}"
    return describe_state(uploader.state)


def handle_token(cmd: TokenCommand, config: Optional[Config] = None) -> str:
    """
    Handle 'token' command: persist the bearer token for later uploads.
    """
    if config is None:
        config = get_config()
    config.set_token(cmd.token)
    logger.info("Bearer token updated")
    return "Token saved"
