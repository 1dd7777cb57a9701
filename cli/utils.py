"""Utility functions for CLI output."""

from cli.constants import GREEN, RED, RESET
from cli.upload_state import Dragging, Error, Idle, Success, Uploading, UploadState

PROGRESS_BAR_WIDTH = 30


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based), e.g. "512 B", "1.50 KiB", "5.00 MiB".
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    size = size_bytes / 1024.0
    for unit in ['KiB', 'MiB', 'GiB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} TiB"


def render_progress_bar(progress: int, width: int = PROGRESS_BAR_WIDTH) -> str:
    filled = round(width * progress / 100)
    return f"[{'#' * filled}{'.' * (width - filled)}] {progress}%"


def describe_state(state: UploadState) -> str:
    """One-line, human-readable description of an upload state."""
    if isinstance(state, Idle):
        return "Idle - ready to upload a .py file"
    if isinstance(state, Dragging):
        return "Drop the file to upload it"
    if isinstance(state, Uploading):
        return f"Uploading… {render_progress_bar(state.progress)}"
    if isinstance(state, Success):
        result = state.result
        return (
            f"{GREEN}Uploaded{RESET}: {result.file_name} "
            f"(ID: {result.id}, Size: {format_file_size(result.size_bytes)}, At: {result.uploaded_at})"
        )
    if isinstance(state, Error):
        return f"{RED}Error{RESET}: {state.message}"
    return f"Unknown state: {state!r}"
