"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal

from cli.constants import DEFAULT_SCAN_LIMIT


@dataclass(frozen=True)
class ListKeyspacesCommand:
    """List keyspaces."""

    command: Literal["keyspaces"] = "keyspaces"


@dataclass(frozen=True)
class CreateKeyspaceCommand:
    """Create the configured keyspace."""

    replication_factor: int = 1
    command: Literal["create-keyspace"] = "create-keyspace"


@dataclass(frozen=True)
class DropKeyspaceCommand:
    """Drop the configured keyspace."""

    command: Literal["drop-keyspace"] = "drop-keyspace"


@dataclass(frozen=True)
class ListColumnFamiliesCommand:
    """List column families of the keyspace."""

    command: Literal["cfs"] = "cfs"


@dataclass(frozen=True)
class CreateColumnFamilyCommand:
    """Create a column family."""

    column_family: str
    binary_columns: tuple[str, ...] = ()
    command: Literal["create-cf"] = "create-cf"


@dataclass(frozen=True)
class DropColumnFamilyCommand:
    """Drop a column family."""

    column_family: str
    command: Literal["drop-cf"] = "drop-cf"


@dataclass(frozen=True)
class PutRecordCommand:
    """Write record columns."""

    column_family: str
    key: str
    columns: tuple[tuple[str, str], ...]
    command: Literal["put"] = "put"


@dataclass(frozen=True)
class GetRecordCommand:
    """Show a record."""

    column_family: str
    key: str
    command: Literal["get"] = "get"


@dataclass(frozen=True)
class DeleteRecordCommand:
    """Delete a record."""

    column_family: str
    key: str
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class PutFileCommand:
    """Store a local file."""

    column_family: str
    key: str
    path: str
    columns: tuple[tuple[str, str], ...] = ()
    command: Literal["put-file"] = "put-file"


@dataclass(frozen=True)
class GetFileCommand:
    """Write a stored file to a local path."""

    column_family: str
    key: str
    path: str
    command: Literal["get-file"] = "get-file"


@dataclass(frozen=True)
class DeleteFileCommand:
    """Delete a stored file."""

    column_family: str
    key: str
    command: Literal["delete-file"] = "delete-file"


@dataclass(frozen=True)
class ScanCommand:
    """List records in key order."""

    column_family: str
    limit: int = DEFAULT_SCAN_LIMIT
    command: Literal["scan"] = "scan"


CommandRequest = (
    ListKeyspacesCommand
    | CreateKeyspaceCommand
    | DropKeyspaceCommand
    | ListColumnFamiliesCommand
    | CreateColumnFamilyCommand
    | DropColumnFamilyCommand
    | PutRecordCommand
    | GetRecordCommand
    | DeleteRecordCommand
    | PutFileCommand
    | GetFileCommand
    | DeleteFileCommand
    | ScanCommand
)
