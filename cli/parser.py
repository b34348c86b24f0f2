"""Command parser for CLI input."""

import shlex

from cli.constants import DEFAULT_SCAN_LIMIT
from cli.models import (
    CommandRequest,
    CreateColumnFamilyCommand,
    CreateKeyspaceCommand,
    DeleteFileCommand,
    DeleteRecordCommand,
    DropColumnFamilyCommand,
    DropKeyspaceCommand,
    GetFileCommand,
    GetRecordCommand,
    ListColumnFamiliesCommand,
    ListKeyspacesCommand,
    PutFileCommand,
    PutRecordCommand,
    ScanCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object (one of the dataclasses in cli.models)

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

    command_name = tokens[0]
    args = tokens[1:]

    if command_name == "keyspaces":
        _expect_no_args(command_name, args)
        return ListKeyspacesCommand()
    elif command_name == "create-keyspace":
        return _parse_create_keyspace(args)
    elif command_name == "drop-keyspace":
        _expect_no_args(command_name, args)
        return DropKeyspaceCommand()
    elif command_name == "cfs":
        _expect_no_args(command_name, args)
        return ListColumnFamiliesCommand()
    elif command_name == "create-cf":
        return _parse_create_cf(args)
    elif command_name == "drop-cf":
        return DropColumnFamilyCommand(column_family=_exactly(command_name, args, "<cf>")[0])
    elif command_name == "put":
        return _parse_put(args)
    elif command_name == "get":
        cf, key = _exactly(command_name, args, "<cf> <key>")
        return GetRecordCommand(column_family=cf, key=key)
    elif command_name == "delete":
        cf, key = _exactly(command_name, args, "<cf> <key>")
        return DeleteRecordCommand(column_family=cf, key=key)
    elif command_name == "put-file":
        return _parse_put_file(args)
    elif command_name == "get-file":
        cf, key, path = _exactly(command_name, args, "<cf> <key> <path>")
        return GetFileCommand(column_family=cf, key=key, path=path)
    elif command_name == "delete-file":
        cf, key = _exactly(command_name, args, "<cf> <key>")
        return DeleteFileCommand(column_family=cf, key=key)
    elif command_name == "scan":
        return _parse_scan(args)
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _expect_no_args(command_name: str, args: list[str]) -> None:
    if args:
        raise ParseError(f"{command_name} takes no arguments")


def _exactly(command_name: str, args: list[str], usage: str) -> list[str]:
    """Check the argument count against a usage string like '<cf> <key>'."""
    expected = len(usage.split())
    if len(args) != expected:
        raise ParseError(f"{command_name} requires exactly {expected} argument(s): {usage}")
    return args


def _parse_positive_int(value: str, what: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ParseError(f"{what} must be an integer, got '{value}'")
    if number <= 0:
        raise ParseError(f"{what} must be positive, got {number}")
    return number


def _parse_columns(args: list[str]) -> tuple[tuple[str, str], ...]:
    """Parse 'name=value' pairs. Values may contain '='; names may not be empty."""
    columns = []
    for arg in args:
        name, sep, value = arg.partition("=")
        if not sep or not name:
            raise ParseError(f"Expected name=value, got '{arg}'")
        columns.append((name, value))
    return tuple(columns)


def _parse_create_keyspace(args: list[str]) -> CreateKeyspaceCommand:
    """Parse 'create-keyspace [replication_factor]' command."""
    if len(args) > 1:
        raise ParseError("create-keyspace takes at most 1 argument: [replication_factor]")
    if not args:
        return CreateKeyspaceCommand()
    return CreateKeyspaceCommand(replication_factor=_parse_positive_int(args[0], "replication_factor"))


def _parse_create_cf(args: list[str]) -> CreateColumnFamilyCommand:
    """Parse 'create-cf <cf> [binary-column...]' command."""
    if not args:
        raise ParseError("create-cf requires a column family name")
    return CreateColumnFamilyCommand(column_family=args[0], binary_columns=tuple(args[1:]))


def _parse_put(args: list[str]) -> PutRecordCommand:
    """Parse 'put <cf> <key> name=value...' command."""
    if len(args) < 3:
        raise ParseError("put requires <cf> <key> and at least one name=value")
    return PutRecordCommand(column_family=args[0], key=args[1], columns=_parse_columns(args[2:]))


def _parse_put_file(args: list[str]) -> PutFileCommand:
    """Parse 'put-file <cf> <key> <path> [name=value...]' command."""
    if len(args) < 3:
        raise ParseError("put-file requires <cf> <key> <path>")
    return PutFileCommand(
        column_family=args[0],
        key=args[1],
        path=args[2],
        columns=_parse_columns(args[3:]),
    )


def _parse_scan(args: list[str]) -> ScanCommand:
    """Parse 'scan <cf> [limit]' command."""
    if not args or len(args) > 2:
        raise ParseError("scan requires <cf> and takes an optional [limit]")
    limit = _parse_positive_int(args[1], "limit") if len(args) == 2 else DEFAULT_SCAN_LIMIT
    return ScanCommand(column_family=args[0], limit=limit)
