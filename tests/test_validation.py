"""Tests for shared upload validation rules."""

import pytest

from common.constants import MAX_FILE_SIZE_BYTES
from common.exceptions import InstructScanError
from common.validation import FileValidationError, get_extension, validate_file
from controller.exceptions import InstructScanError as ControllerBase


def test_accepts_valid_py_file():
    validate_file('main.py', 1024)


def test_accepts_exactly_five_mib():
    validate_file('script.py', 5 * 1024 * 1024)


@pytest.mark.parametrize('name', ['Script.PY', 'tool.Py', 'pkg/module.py'])
def test_extension_is_case_insensitive(name):
    validate_file(name, 200)


def test_rejects_non_py_extension():
    with pytest.raises(FileValidationError, match='Only .py files are allowed. Received: .txt'):
        validate_file('data.txt', 100)


@pytest.mark.parametrize('name', ['index.js', 'cache.pyc', 'archive.py.zip'])
def test_rejects_other_extensions(name):
    with pytest.raises(FileValidationError, match='Only .py files are allowed'):
        validate_file(name, 100)


@pytest.mark.parametrize('name', ['README', 'Makefile', '.py'])
def test_rejects_missing_extension(name):
    with pytest.raises(FileValidationError, match='no extension'):
        validate_file(name, 100)


def test_rejects_one_byte_over_limit():
    with pytest.raises(FileValidationError) as exc_info:
        validate_file('big.py', MAX_FILE_SIZE_BYTES + 1)

    assert 'exceeds 5 MB limit' in str(exc_info.value)
    assert 'Received: 5.00 MB' in str(exc_info.value)


def test_size_message_reports_two_decimals():
    with pytest.raises(FileValidationError, match='Received: 7.50 MB'):
        validate_file('big.py', int(7.5 * 1024 * 1024))


def test_rejects_empty_file():
    with pytest.raises(FileValidationError, match='File is empty'):
        validate_file('empty.py', 0)


def test_extension_checked_before_emptiness():
    with pytest.raises(FileValidationError, match='Only .py files are allowed'):
        validate_file('empty.txt', 0)


def test_extension_checked_before_size():
    with pytest.raises(FileValidationError, match='Only .py files are allowed'):
        validate_file('huge.bin', MAX_FILE_SIZE_BYTES * 2)


def test_get_extension_handles_windows_paths():
    assert get_extension('C:\\work\\Main.PY') == '.py'
    assert get_extension('noext') == ''


def test_validation_error_shares_base_exception():
    assert issubclass(FileValidationError, InstructScanError)
    assert ControllerBase is InstructScanError
