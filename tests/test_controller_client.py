"""Unit tests for ControllerClient."""

import httpx
import pytest

from cli.controller_client import (
    NETWORK_ERROR_MESSAGE,
    UPLOAD_FAILED_MESSAGE,
    ControllerClient,
    UploadFailedError,
)

UPLOADED = {
    'id': '3f2c1e9a-0000-4000-8000-000000000001',
    'fileName': 'main.py',
    'sizeBytes': 15,
    'uploadedAt': '2026-01-01T00:00:00.000Z',
}


def make_client(config, handler):
    client = ControllerClient(config)
    client.session = httpx.Client(transport=httpx.MockTransport(handler), base_url='http://test')
    return client


def test_upload_success(temp_config):
    """Test a 201 response is turned into a FileDescriptor."""
    seen = {}

    def handler(request):
        seen['path'] = request.url.path
        seen['method'] = request.method
        seen['body'] = request.read()
        seen['content_type'] = request.headers['Content-Type']
        return httpx.Response(201, json=UPLOADED)

    client = make_client(temp_config, handler)
    descriptor = client.upload_py_file('main.py', b'print("hello")\n')

    assert descriptor.id == UPLOADED['id']
    assert descriptor.file_name == 'main.py'
    assert descriptor.size_bytes == 15
    assert descriptor.uploaded_at == UPLOADED['uploadedAt']

    assert seen['method'] == 'POST'
    assert seen['path'] == '/api/files'
    assert seen['content_type'].startswith('multipart/form-data; boundary=')
    assert b'name="file"; filename="main.py"' in seen['body']
    assert b'print("hello")' in seen['body']


def test_upload_sends_bearer_token(temp_config):
    """Test the stored token is sent as a bearer Authorization header."""
    temp_config.data['token'] = 'header.payload.signature'
    seen = {}

    def handler(request):
        request.read()
        seen['authorization'] = request.headers.get('Authorization')
        seen['request_id'] = request.headers.get('X-Request-ID')
        return httpx.Response(201, json=UPLOADED)

    client = make_client(temp_config, handler)
    client.upload_py_file('main.py', b'print(1)')

    assert seen['authorization'] == 'Bearer header.payload.signature'
    assert seen['request_id'] == client.request_id


def test_upload_without_token_omits_header(temp_config):
    """Test no Authorization header is sent when no token is stored."""
    seen = {}

    def handler(request):
        request.read()
        seen['authorization'] = request.headers.get('Authorization')
        return httpx.Response(401, json={'error': 'Missing or invalid authorization header', 'code': 'UNAUTHORIZED'})

    client = make_client(temp_config, handler)

    with pytest.raises(UploadFailedError) as exc_info:
        client.upload_py_file('main.py', b'print(1)')

    assert seen['authorization'] is None
    assert exc_info.value.message == 'Missing or invalid authorization header'
    assert exc_info.value.status_code == 401


def test_progress_reaches_100(temp_config):
    """Test progress is reported while the body is consumed and ends at 100."""
    progress = []

    def handler(request):
        request.read()
        return httpx.Response(201, json=UPLOADED)

    client = make_client(temp_config, handler)
    client.upload_py_file('big.py', b'#' * (300 * 1024), on_progress=progress.append)

    assert len(progress) > 1
    assert progress == sorted(progress)
    assert progress[-1] == 100


def test_server_error_message_is_used(temp_config):
    """Test the server's error field is surfaced verbatim."""
    def handler(request):
        request.read()
        return httpx.Response(500, json={'error': 'Failed to store file', 'code': 'STORAGE_ERROR'})

    client = make_client(temp_config, handler)

    with pytest.raises(UploadFailedError) as exc_info:
        client.upload_py_file('main.py', b'print(1)')

    assert exc_info.value.message == 'Failed to store file'
    assert exc_info.value.status_code == 500
    assert exc_info.value.network is False


def test_non_json_error_falls_back_to_status(temp_config):
    """Test a non-JSON error body produces a status-based message."""
    def handler(request):
        request.read()
        return httpx.Response(502, text='Bad Gateway')

    client = make_client(temp_config, handler)

    with pytest.raises(UploadFailedError, match='Upload failed with status 502'):
        client.upload_py_file('main.py', b'print(1)')


def test_network_error(temp_config):
    """Test transport failures produce the fixed network error message."""
    def handler(request):
        raise httpx.ConnectError('Connection refused', request=request)

    client = make_client(temp_config, handler)

    with pytest.raises(UploadFailedError) as exc_info:
        client.upload_py_file('main.py', b'print(1)')

    assert exc_info.value.message == NETWORK_ERROR_MESSAGE
    assert exc_info.value.network is True
    assert exc_info.value.status_code is None


def test_malformed_success_body(temp_config):
    """Test a 201 without the expected fields is treated as a failure."""
    def handler(request):
        request.read()
        return httpx.Response(201, json={'id': 'abc'})

    client = make_client(temp_config, handler)

    with pytest.raises(UploadFailedError, match='Invalid response from server'):
        client.upload_py_file('main.py', b'print(1)')


def test_undecodable_response_is_upload_failure(temp_config):
    """Test non-transport httpx errors are mapped to UploadFailedError."""
    def handler(request):
        request.read()
        return httpx.Response(
            201,
            headers={'Content-Encoding': 'gzip', 'Content-Type': 'application/json'},
            content=b'this is not gzip',
        )

    client = make_client(temp_config, handler)

    with pytest.raises(UploadFailedError) as exc_info:
        client.upload_py_file('main.py', b'print(1)')

    assert exc_info.value.message == UPLOAD_FAILED_MESSAGE
    assert exc_info.value.network is False
