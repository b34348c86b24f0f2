"""REPL with prompt_toolkit for user interaction."""

import os
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from pydantic import ValidationError

from common.logging_config import get_logger
from cli.commands import (
    close_connection,
    handle_cfs,
    handle_create_cf,
    handle_create_keyspace,
    handle_delete,
    handle_delete_file,
    handle_drop_cf,
    handle_drop_keyspace,
    handle_get,
    handle_get_file,
    handle_keyspaces,
    handle_put,
    handle_put_file,
    handle_scan,
)
from cli.constants import (
    COMMANDS,
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
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
from cli.parser import ParseError, parse_command
from widerow.exceptions import WiderowError

logger = get_logger(__name__)

HANDLERS = {
    ListKeyspacesCommand: handle_keyspaces,
    CreateKeyspaceCommand: handle_create_keyspace,
    DropKeyspaceCommand: handle_drop_keyspace,
    ListColumnFamiliesCommand: handle_cfs,
    CreateColumnFamilyCommand: handle_create_cf,
    DropColumnFamilyCommand: handle_drop_cf,
    PutRecordCommand: handle_put,
    GetRecordCommand: handle_get,
    DeleteRecordCommand: handle_delete,
    PutFileCommand: handle_put_file,
    GetFileCommand: handle_get_file,
    DeleteFileCommand: handle_delete_file,
    ScanCommand: handle_scan,
}


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


def dispatch_command(cmd_obj) -> str:
    """
    Dispatch parsed command to appropriate handler.

    Store and local I/O failures are reported as an error line rather than
    ending the session.
    """
    handler = HANDLERS.get(type(cmd_obj))
    if handler is None:
        return f"Unknown command type: {type(cmd_obj)}"

    try:
        return handler(cmd_obj)
    except (WiderowError, OSError, ValidationError) as e:
        logger.error(f"Command '{cmd_obj.command}' failed: {type(e).__name__}: {e}")
        return f"Error: {e}"


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    completer = WordCompleter(COMMANDS, ignore_case=True)
    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=completer, history=history, style=STYLE
    )

    clear_screen()
    show_welcome()

    try:
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
                print(dispatch_command(cmd_obj))

            except ParseError as e:
                print(f"Error: {e}")
            except KeyboardInterrupt:
                continue
            except EOFError:
                print("\nGoodbye!")
                break
    finally:
        close_connection()
