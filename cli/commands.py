"""Command handler functions for CLI operations."""

import os
import shutil
from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from common.types import ReplicationStrategy
from cli.config import Config
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
from cli.utils import ProgressFileWrapper, format_file_size, format_record
from widerow.node_connection import NodeConnection

logger = get_logger(__name__)


_connection: Optional[NodeConnection] = None


def get_connection() -> NodeConnection:
    """
    Get or create global NodeConnection instance.

    Returns:
        NodeConnection built from ~/.widerow/config.json
    """
    global _connection
    if _connection is None:
        logger.debug("Creating new NodeConnection instance")
        config = Config(Path.home() / '.widerow' / 'config.json')
        _connection = NodeConnection(config.to_connection_config(), config.get_host(), config.get_port())
    return _connection


def close_connection() -> None:
    """Close the global connection if one was opened."""
    global _connection
    if _connection is not None:
        _connection.close()
        _connection = None


def handle_keyspaces(cmd: ListKeyspacesCommand, connection: Optional[NodeConnection] = None) -> str:
    if connection is None:
        connection = get_connection()
    names = sorted(connection.keyspaces())
    if not names:
        return "No keyspaces."
    return "\n".join(names)


def handle_create_keyspace(cmd: CreateKeyspaceCommand, connection: Optional[NodeConnection] = None) -> str:
    """
    Handle 'create-keyspace' command.

    Args:
        cmd: CreateKeyspaceCommand with replication factor
        connection: Optional NodeConnection for dependency injection (testing)

    Returns:
        Success or "already exists" message
    """
    if connection is None:
        connection = get_connection()
    keyspace = connection.config.keyspace
    options = {"replication_factor": str(cmd.replication_factor)}
    if connection.add_keyspace(ReplicationStrategy.SIMPLE, options):
        return f"Keyspace '{keyspace}' created."
    return f"Keyspace '{keyspace}' already exists."


def handle_drop_keyspace(cmd: DropKeyspaceCommand, connection: Optional[NodeConnection] = None) -> str:
    if connection is None:
        connection = get_connection()
    keyspace = connection.config.keyspace
    if connection.delete_keyspace():
        return f"Keyspace '{keyspace}' dropped."
    return f"Keyspace '{keyspace}' does not exist."


def handle_cfs(cmd: ListColumnFamiliesCommand, connection: Optional[NodeConnection] = None) -> str:
    if connection is None:
        connection = get_connection()
    names = sorted(connection.column_families())
    if not names:
        return "No column families."
    return "\n".join(names)


def handle_create_cf(cmd: CreateColumnFamilyCommand, connection: Optional[NodeConnection] = None) -> str:
    if connection is None:
        connection = get_connection()
    if connection.add_column_family(cmd.column_family, *cmd.binary_columns):
        return f"Column family '{cmd.column_family}' created."
    return f"Column family '{cmd.column_family}' already exists."


def handle_drop_cf(cmd: DropColumnFamilyCommand, connection: Optional[NodeConnection] = None) -> str:
    if connection is None:
        connection = get_connection()
    if connection.delete_column_family(cmd.column_family):
        return f"Column family '{cmd.column_family}' dropped."
    return f"Column family '{cmd.column_family}' does not exist."


def handle_put(cmd: PutRecordCommand, connection: Optional[NodeConnection] = None) -> str:
    if connection is None:
        connection = get_connection()
    connection.put_record(cmd.column_family, cmd.key, dict(cmd.columns))
    return f"Stored {len(cmd.columns)} column(s) at '{cmd.key}'."


def handle_get(cmd: GetRecordCommand, connection: Optional[NodeConnection] = None) -> str:
    if connection is None:
        connection = get_connection()
    record = connection.get_record(cmd.column_family, cmd.key)
    if record is None:
        return f"No record at '{cmd.key}'."
    return format_record(cmd.key, record)


def handle_delete(cmd: DeleteRecordCommand, connection: Optional[NodeConnection] = None) -> str:
    if connection is None:
        connection = get_connection()
    connection.delete_record(cmd.column_family, cmd.key)
    return f"Deleted '{cmd.key}'."


def handle_put_file(cmd: PutFileCommand, connection: Optional[NodeConnection] = None) -> str:
    """
    Handle 'put-file' command.

    Args:
        cmd: PutFileCommand with column family, key, local path and extra columns
        connection: Optional NodeConnection for dependency injection (testing)

    Returns:
        Success or error message
    """
    logger.info(f"Executing put-file command: {cmd.path} -> {cmd.column_family}/{cmd.key}")
    if not os.path.exists(cmd.path):
        return f"Error: File not found: {cmd.path}"
    if not os.path.isfile(cmd.path):
        return f"Error: Not a file: {cmd.path}"

    if connection is None:
        connection = get_connection()

    file_size = os.path.getsize(cmd.path)
    stream = ProgressFileWrapper(cmd.path, file_size, os.path.basename(cmd.path))
    connection.put_file(cmd.column_family, cmd.key, stream, dict(cmd.columns))

    info = connection.get_file_info(cmd.column_family, cmd.key)
    chunks = info.chunk_count if info is not None else 0
    return f"Stored '{cmd.key}' ({format_file_size(file_size)}, {chunks} chunk(s))."


def handle_get_file(cmd: GetFileCommand, connection: Optional[NodeConnection] = None) -> str:
    """
    Handle 'get-file' command.

    The stored content is streamed to the output path one chunk at a time.
    """
    logger.info(f"Executing get-file command: {cmd.column_family}/{cmd.key} -> {cmd.path}")
    if connection is None:
        connection = get_connection()

    reader = connection.get_file_content(cmd.column_family, cmd.key)
    if reader is None:
        return f"No file at '{cmd.key}'."

    output_path = Path(cmd.path)
    if output_path.parent and not output_path.parent.exists():
        output_path.parent.mkdir(parents=True, exist_ok=True)

    with reader, open(output_path, 'wb') as out:
        shutil.copyfileobj(reader, out)

    size = output_path.stat().st_size
    return f"Wrote '{cmd.key}' to {output_path} ({format_file_size(size)})."


def handle_delete_file(cmd: DeleteFileCommand, connection: Optional[NodeConnection] = None) -> str:
    if connection is None:
        connection = get_connection()
    connection.delete_file(cmd.column_family, cmd.key)
    return f"Deleted file '{cmd.key}'."


def handle_scan(cmd: ScanCommand, connection: Optional[NodeConnection] = None) -> str:
    """
    Handle 'scan' command.

    Stops the enumeration once `limit` records have been collected.
    """
    if connection is None:
        connection = get_connection()

    lines = []

    def collect(key: str, columns: dict) -> bool:
        lines.append(format_record(key, columns))
        return len(lines) < cmd.limit

    count = connection.for_each_record(cmd.column_family, collect)
    if count == 0:
        return "No records."
    lines.append(f"({count} record(s))")
    return "\n".join(lines)
