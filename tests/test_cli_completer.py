"""Tests for InstructScanCompleter."""

import pytest
from prompt_toolkit.document import Document

from cli.completer import InstructScanCompleter
from cli.constants import COMMANDS


@pytest.fixture
def completer():
    return InstructScanCompleter()


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """
    Working directory with a mix of Python and non-Python files.
    """
    (tmp_path / 'main.py').write_text('print(1)')
    (tmp_path / 'Tool.PY').write_text('print(2)')
    (tmp_path / 'notes.txt').write_text('hello')
    (tmp_path / '.hidden.py').write_text('')
    (tmp_path / 'pkg').mkdir()
    (tmp_path / 'pkg' / 'module.py').write_text('x = 1')
    monkeypatch.chdir(tmp_path)
    return tmp_path


def get_completions_list(completer, text):
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


def test_completes_all_commands_on_empty_input(completer):
    assert get_completions_list(completer, '') == COMMANDS


def test_completes_command_prefix(completer):
    assert get_completions_list(completer, 'up') == ['upload']
    assert get_completions_list(completer, 's') == ['select', 'status']


def test_upload_completes_python_files_and_dirs(completer, project_dir):
    completions = get_completions_list(completer, 'upload ')

    assert 'main.py' in completions
    assert 'Tool.PY' in completions
    assert 'pkg/' in completions
    assert 'notes.txt' not in completions
    assert '.hidden.py' not in completions


def test_upload_completes_inside_directory(completer, project_dir):
    assert get_completions_list(completer, 'upload pkg/') == ['pkg/module.py']


def test_upload_completes_prefix(completer, project_dir):
    assert get_completions_list(completer, 'upload ma') == ['main.py']


def test_no_completion_for_other_commands(completer, project_dir):
    assert get_completions_list(completer, 'status ') == []


def test_no_completion_after_path(completer, project_dir):
    assert get_completions_list(completer, 'upload main.py ') == []
