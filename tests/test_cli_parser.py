"""Tests for CLI command parsing."""

import pytest

from cli.models import (
    FilesCommand,
    ResetCommand,
    SelectCommand,
    StatusCommand,
    TokenCommand,
    UploadCommand,
)
from cli.parser import ParseError, parse_command


def test_parse_upload():
    assert parse_command('upload main.py') == UploadCommand(path='main.py')


def test_parse_upload_quoted_path():
    assert parse_command('upload "my scripts/tool.py"') == UploadCommand(path='my scripts/tool.py')


@pytest.mark.parametrize('line, expected', [
    ('files', FilesCommand()),
    ('status', StatusCommand()),
    ('reset', ResetCommand()),
    ('select abc-123', SelectCommand(file_id='abc-123')),
    ('token eyJ.abc.def', TokenCommand(token='eyJ.abc.def')),
])
def test_parse_simple_commands(line, expected):
    assert parse_command(line) == expected


def test_upload_requires_one_path():
    with pytest.raises(ParseError, match='upload requires exactly 1 argument'):
        parse_command('upload')

    with pytest.raises(ParseError, match='upload requires exactly 1 argument'):
        parse_command('upload a.py b.py')


def test_no_arg_commands_reject_arguments():
    with pytest.raises(ParseError, match='files takes no arguments'):
        parse_command('files --all')


def test_empty_command():
    with pytest.raises(ParseError, match='Empty command'):
        parse_command('   ')


def test_unknown_command():
    with pytest.raises(ParseError, match='Unknown command: download'):
        parse_command('download main.py')


def test_unbalanced_quotes():
    with pytest.raises(ParseError, match='Invalid syntax'):
        parse_command('upload "main.py')
