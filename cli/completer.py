"""Custom completer for the InstructScan CLI with .py path completion."""

from pathlib import Path
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, SUPPORTED_FILE_EXTENSIONS


class InstructScanCompleter(Completer):
    """
    Completes command names for the first token and, for 'upload',
    directories and .py files relative to the working directory.
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        if tokens[0].lower() != "upload":
            return

        # upload takes a single path
        if len(tokens) > 2 or (len(tokens) == 2 and is_typing_new_token):
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        yield from self._complete_paths(current_word)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_paths(self, partial: str) -> Iterable[Completion]:
        if "/" in partial:
            head, _, prefix = partial.rpartition("/")
            directory = Path(head or "/").expanduser()
            base = f"{head}/"
        else:
            directory, prefix, base = Path.cwd(), partial, ""

        if not directory.is_dir():
            return

        try:
            entries = sorted(directory.iterdir())
        except OSError:
            return

        for entry in entries:
            if not entry.name.startswith(prefix) or entry.name.startswith("."):
                continue
            if entry.is_dir():
                yield Completion(f"{base}{entry.name}/", start_position=-len(partial))
            elif entry.name.lower().endswith(SUPPORTED_FILE_EXTENSIONS):
                yield Completion(f"{base}{entry.name}", start_position=-len(partial))
