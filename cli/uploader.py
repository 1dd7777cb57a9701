"""Toolkit-independent upload widget.

FileUploader owns the upload state, the drag-and-drop bookkeeping and the
list of files uploaded in this session. A front-end (the REPL, or any GUI
that can deliver drag events) feeds it events and renders its state.
"""

from typing import Callable, List, Optional

from common.logging_config import get_logger
from common.types import FileDescriptor
from common.validation import FileValidationError, validate_file
from cli import upload_state
from cli.controller_client import UPLOAD_FAILED_MESSAGE, ControllerClient, UploadFailedError
from cli.upload_state import Idle, Success, Error, Uploading, UploadState

logger = get_logger(__name__)

StateListener = Callable[[UploadState, UploadState], None]


class FileUploader:
    """Drives one upload at a time through the upload state machine."""

    def __init__(self, client: ControllerClient):
        self.client = client
        self.state: UploadState = Idle()
        self.uploaded_files: List[FileDescriptor] = []
        self.selected_file_id: Optional[str] = None
        self._drag_depth = 0
        self._listeners: List[StateListener] = []

    def subscribe(self, listener: StateListener) -> None:
        """Register a callback invoked with (old_state, new_state) on every change."""
        self._listeners.append(listener)

    def _set_state(self, new_state: UploadState) -> None:
        if new_state == self.state:
            return
        old_state = self.state
        self.state = new_state
        logger.debug(f"Upload state {old_state.status} -> {new_state.status}")
        for listener in self._listeners:
            listener(old_state, new_state)

    @property
    def is_uploading(self) -> bool:
        return isinstance(self.state, Uploading)

    # Drag and drop. Nested elements fire one enter/leave pair per boundary
    # crossed, so only the outermost enter and the last leave change state.

    def drag_enter(self) -> None:
        self._drag_depth += 1
        if self._drag_depth == 1 and isinstance(self.state, Idle):
            self._set_state(upload_state.start_drag(self.state))

    def drag_leave(self) -> None:
        if self._drag_depth == 0:
            return
        self._drag_depth -= 1
        if self._drag_depth == 0 and isinstance(self.state, upload_state.Dragging):
            self._set_state(upload_state.end_drag(self.state))

    def drop(self, file_name: str, data: bytes) -> UploadState:
        """Handle a dropped file. The drag counter always returns to zero."""
        self._drag_depth = 0
        return self.select_file(file_name, data)

    def select_file(self, file_name: str, data: bytes) -> UploadState:
        """
        Validate and upload a file chosen by the user.

        Ignored while another upload is in flight. A previous success or
        error is cleared first.

        Returns:
            The state after the attempt
        """
        if self.is_uploading:
            logger.warning(f"Ignoring {file_name}: an upload is already in progress")
            return self.state

        if isinstance(self.state, (Success, Error)):
            self._set_state(upload_state.reset(self.state))

        try:
            validate_file(file_name, len(data))
        except FileValidationError as e:
            self._set_state(upload_state.fail(self.state, str(e)))
            return self.state

        self._set_state(upload_state.begin_upload(self.state))

        try:
            result = self.client.upload_py_file(file_name, data, on_progress=self.update_progress)
        except UploadFailedError as e:
            self._set_state(upload_state.fail(self.state, e.message))
            return self.state
        except Exception as e:
            # Every failure must leave the uploading state
            logger.error(f"Unexpected upload failure for {file_name}: {type(e).__name__}: {e}", exc_info=True)
            self._set_state(upload_state.fail(self.state, UPLOAD_FAILED_MESSAGE))
            return self.state

        self.uploaded_files.insert(0, result)
        self._set_state(upload_state.complete(self.state, result))
        return self.state

    def update_progress(self, progress: int) -> None:
        if self.is_uploading:
            self._set_state(upload_state.report_progress(self.state, progress))

    def reset(self) -> None:
        """Explicit 'try again' / 'upload another file'."""
        self._set_state(upload_state.reset(self.state))

    def select_uploaded(self, file_id: str) -> FileDescriptor:
        """
        Mark one of this session's uploaded files as selected.

        Raises:
            KeyError: If no uploaded file has that id
        """
        for descriptor in self.uploaded_files:
            if descriptor.id == file_id:
                self.selected_file_id = file_id
                return descriptor
        raise KeyError(file_id)
