"""HTTP client for communicating with Controller service."""

import uuid
from typing import Callable, Iterator, Optional

import httpx

from common.constants import PYTHON_CONTENT_TYPE, UPLOAD_ENDPOINT, UPLOAD_FIELD_NAME
from common.logging_config import get_logger
from common.types import FileDescriptor
from cli.config import Config

logger = get_logger(__name__)

UPLOAD_CHUNK_SIZE = 64 * 1024
NETWORK_ERROR_MESSAGE = "Network error during file upload"
UPLOAD_FAILED_MESSAGE = "Upload failed"

ProgressCallback = Callable[[int], None]


class UploadFailedError(Exception):
    """
    Raised when an upload does not produce a stored file.

    network is True when the request never got an HTTP response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, network: bool = False):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.network = network


class ControllerClient:
    """HTTP client for the Controller upload API."""

    def __init__(self, config: Config):
        """
        Initialize controller client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized ControllerClient [base_url={config.get_base_url()}]")

    def _iter_with_progress(
        self,
        body: bytes,
        on_progress: Optional[ProgressCallback]
    ) -> Iterator[bytes]:
        """
        Yield the encoded body in pieces, reporting the percentage sent
        after each piece has been consumed by the transport.
        """
        total = len(body)
        sent = 0
        for start in range(0, total, UPLOAD_CHUNK_SIZE):
            piece = body[start:start + UPLOAD_CHUNK_SIZE]
            yield piece
            sent += len(piece)
            if on_progress is not None and total:
                on_progress(round(sent * 100 / total))

    def upload_py_file(
        self,
        file_name: str,
        data: bytes,
        on_progress: Optional[ProgressCallback] = None
    ) -> FileDescriptor:
        """
        Upload a Python file as multipart field 'file'.

        Args:
            file_name: Name sent with the file part
            data: File content
            on_progress: Called with 0-100 as the body is sent

        Returns:
            Descriptor of the stored file

        Raises:
            UploadFailedError: On network failure, any other httpx error or a non-201 response
        """
        self.request_id = str(uuid.uuid4())
        headers = {'X-Request-ID': self.request_id}
        token = self.config.get_token()
        if token:
            headers['Authorization'] = f"Bearer {token}"

        # Encode once up front so the body can be streamed with progress
        encoded = self.session.build_request(
            'POST',
            UPLOAD_ENDPOINT,
            files={UPLOAD_FIELD_NAME: (file_name, data, PYTHON_CONTENT_TYPE)},
        )
        body = encoded.read()
        headers['Content-Type'] = encoded.headers['Content-Type']
        headers['Content-Length'] = str(len(body))

        logger.debug(
            f"Uploading {file_name} ({len(data)} bytes) [request_id={self.request_id}]"
        )

        try:
            response = self.session.post(
                UPLOAD_ENDPOINT,
                content=self._iter_with_progress(body, on_progress),
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.error(
                f"Network error during upload: {type(e).__name__}: {e} [request_id={self.request_id}]"
            )
            raise UploadFailedError(NETWORK_ERROR_MESSAGE, network=True) from e
        except httpx.HTTPError as e:
            logger.error(
                f"Upload request failed: {type(e).__name__}: {e} [request_id={self.request_id}]"
            )
            raise UploadFailedError(UPLOAD_FAILED_MESSAGE) from e

        logger.debug(
            f"Response received: status={response.status_code} [request_id={self.request_id}]"
        )

        if response.status_code == 201:
            try:
                return FileDescriptor.from_json(response.json())
            except (ValueError, KeyError, TypeError) as e:
                raise UploadFailedError(
                    "Invalid response from server", status_code=response.status_code
                ) from e

        logger.warning(
            f"Upload rejected: status={response.status_code} [request_id={self.request_id}]"
        )
        raise UploadFailedError(
            self._error_message(response), status_code=response.status_code
        )

    def _error_message(self, response: httpx.Response) -> str:
        """Server's literal error message, or a status-based fallback."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get('error'), str):
            return body['error']
        return f"Upload failed with status {response.status_code}"

    def close(self) -> None:
        self.session.close()
