"""Upload state machine for the client widget.

The state is a single tagged value; every change goes through one of the
transition functions below, which return a new state or raise
InvalidTransitionError.

    idle -> dragging -> idle
    idle | dragging -> uploading
    uploading -> uploading (progress)
    uploading -> success | error
    idle | dragging -> error (local validation failure)
    success | error -> idle
"""

from dataclasses import dataclass
from typing import Literal, Optional

from common.types import FileDescriptor


class InvalidTransitionError(Exception):
    """Raised when a transition is not allowed from the current state."""

    pass


@dataclass(frozen=True)
class Idle:
    """Nothing in progress."""

    status: Literal["idle"] = "idle"


@dataclass(frozen=True)
class Dragging:
    """A file is being dragged over the drop zone."""

    status: Literal["dragging"] = "dragging"


@dataclass(frozen=True)
class Uploading:
    """Transfer in flight."""

    progress: int = 0
    status: Literal["uploading"] = "uploading"


@dataclass(frozen=True)
class Success:
    """Last transfer completed."""

    result: FileDescriptor
    status: Literal["success"] = "success"


@dataclass(frozen=True)
class Error:
    """Last validation or transfer failed."""

    message: str
    status: Literal["error"] = "error"


UploadState = Idle | Dragging | Uploading | Success | Error


def _reject(state: UploadState, action: str) -> InvalidTransitionError:
    return InvalidTransitionError(f"Cannot {action} while {state.status}")


def start_drag(state: UploadState) -> UploadState:
    if not isinstance(state, Idle):
        raise _reject(state, "start dragging")
    return Dragging()


def end_drag(state: UploadState) -> UploadState:
    if not isinstance(state, Dragging):
        raise _reject(state, "stop dragging")
    return Idle()


def begin_upload(state: UploadState) -> UploadState:
    if not isinstance(state, (Idle, Dragging)):
        raise _reject(state, "start an upload")
    return Uploading(progress=0)


def report_progress(state: UploadState, progress: int) -> UploadState:
    """Progress is clamped to 0-100 and never goes backwards."""
    if not isinstance(state, Uploading):
        raise _reject(state, "report progress")
    clamped = max(0, min(100, int(progress)))
    if clamped <= state.progress:
        return state
    return Uploading(progress=clamped)


def complete(state: UploadState, result: FileDescriptor) -> UploadState:
    if not isinstance(state, Uploading):
        raise _reject(state, "complete an upload")
    return Success(result=result)


def fail(state: UploadState, message: str) -> UploadState:
    if not isinstance(state, (Idle, Dragging, Uploading)):
        raise _reject(state, "fail")
    return Error(message=message)


def reset(state: UploadState) -> UploadState:
    if not isinstance(state, (Success, Error)):
        raise _reject(state, "reset")
    return Idle()


def progress_of(state: UploadState) -> int:
    """Progress to display for any state."""
    if isinstance(state, Uploading):
        return state.progress
    if isinstance(state, Success):
        return 100
    return 0


def error_of(state: UploadState) -> Optional[str]:
    if isinstance(state, Error):
        return state.message
    return None
