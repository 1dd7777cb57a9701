"""REPL with prompt_toolkit for user interaction."""

import os
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.commands import (
    get_uploader,
    handle_files,
    handle_reset,
    handle_select,
    handle_status,
    handle_token,
    handle_upload,
)
from cli.completer import InstructScanCompleter
from cli.constants import (
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    FilesCommand,
    ResetCommand,
    SelectCommand,
    StatusCommand,
    TokenCommand,
    UploadCommand,
)
from cli.parser import ParseError, parse_command
from cli.upload_state import Uploading, UploadState
from cli.utils import render_progress_bar


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(LOGO)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def print_progress(old_state: UploadState, new_state: UploadState) -> None:
    """State listener that redraws a single progress line while uploading."""
    if isinstance(new_state, Uploading):
        sys.stdout.write(f"\rUploading… {render_progress_bar(new_state.progress)}")
        sys.stdout.flush()
    elif isinstance(old_state, Uploading):
        sys.stdout.write("\n")
        sys.stdout.flush()


def dispatch_command(cmd_obj) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, UploadCommand):
        return handle_upload(cmd_obj)
    elif isinstance(cmd_obj, FilesCommand):
        return handle_files(cmd_obj)
    elif isinstance(cmd_obj, SelectCommand):
        return handle_select(cmd_obj)
    elif isinstance(cmd_obj, StatusCommand):
        return handle_status(cmd_obj)
    elif isinstance(cmd_obj, ResetCommand):
        return handle_reset(cmd_obj)
    elif isinstance(cmd_obj, TokenCommand):
        return handle_token(cmd_obj)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    session: PromptSession = PromptSession(
        completer=InstructScanCompleter(), history=InMemoryHistory(), style=STYLE
    )

    get_uploader().subscribe(print_progress)

    clear_screen()
    show_welcome()

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])

            if not user_input.strip():
                continue

            if user_input.strip() == "exit":
                print("Goodbye!")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                clear_screen()
                show_welcome()
                continue

            cmd_obj = parse_command(user_input)
            result = dispatch_command(cmd_obj)
            print(result)

        except ParseError as e:
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
