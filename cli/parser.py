"""Command parser for CLI input."""

import shlex

from cli.models import (
    CommandRequest,
    FilesCommand,
    ResetCommand,
    SelectCommand,
    StatusCommand,
    TokenCommand,
    UploadCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name, args = tokens[0], tokens[1:]

    if command_name == "upload":
        if len(args) != 1:
            raise ParseError("upload requires exactly 1 argument: <path>")
        return UploadCommand(path=args[0])
    elif command_name == "files":
        _expect_no_args("files", args)
        return FilesCommand()
    elif command_name == "select":
        if len(args) != 1:
            raise ParseError("select requires exactly 1 argument: <id>")
        return SelectCommand(file_id=args[0])
    elif command_name == "status":
        _expect_no_args("status", args)
        return StatusCommand()
    elif command_name == "reset":
        _expect_no_args("reset", args)
        return ResetCommand()
    elif command_name == "token":
        if len(args) != 1:
            raise ParseError("token requires exactly 1 argument: <jwt>")
        return TokenCommand(token=args[0])
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _expect_no_args(command_name: str, args: list[str]) -> None:
    if args:
        raise ParseError(f"{command_name} takes no arguments")
