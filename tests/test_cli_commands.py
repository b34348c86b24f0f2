"""Tests for CLI command handlers."""

from unittest.mock import Mock

import pytest

from cli.commands import (
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
from cli.repl import dispatch_command
from common.types import ReplicationStrategy
from widerow.exceptions import FaultError
from widerow.node_connection import NodeConnection

TEST_CF = "testcf"


def test_handle_create_keyspace_with_mock():
    """Test create-keyspace passes the replication factor as a strategy option."""
    mock_connection = Mock(spec=NodeConnection)
    mock_connection.config = Mock(keyspace="docs")
    mock_connection.add_keyspace.return_value = True

    result = handle_create_keyspace(CreateKeyspaceCommand(replication_factor=3), connection=mock_connection)

    assert "created" in result
    mock_connection.add_keyspace.assert_called_once_with(
        ReplicationStrategy.SIMPLE, {"replication_factor": "3"}
    )


def test_schema_commands(memory_store, make_connection):
    connection = make_connection(memory_store)

    assert handle_keyspaces(ListKeyspacesCommand(), connection=connection) == "No keyspaces."
    assert "created" in handle_create_keyspace(CreateKeyspaceCommand(), connection=connection)
    assert "already exists" in handle_create_keyspace(CreateKeyspaceCommand(), connection=connection)
    assert handle_keyspaces(ListKeyspacesCommand(), connection=connection) == "testks"

    assert "created" in handle_create_cf(CreateColumnFamilyCommand(column_family="docs"), connection=connection)
    assert handle_cfs(ListColumnFamiliesCommand(), connection=connection) == "docs"
    assert "dropped" in handle_drop_cf(DropColumnFamilyCommand(column_family="docs"), connection=connection)
    assert "does not exist" in handle_drop_cf(DropColumnFamilyCommand(column_family="docs"), connection=connection)

    assert "dropped" in handle_drop_keyspace(DropKeyspaceCommand(), connection=connection)
    assert "does not exist" in handle_drop_keyspace(DropKeyspaceCommand(), connection=connection)


def test_record_commands(memory_connection):
    put = PutRecordCommand(column_family=TEST_CF, key="k", columns=(("b", "2"), ("a", "1")))
    assert "2 column(s)" in handle_put(put, connection=memory_connection)

    get = GetRecordCommand(column_family=TEST_CF, key="k")
    assert handle_get(get, connection=memory_connection) == "k: a=1, b=2"

    handle_delete(DeleteRecordCommand(column_family=TEST_CF, key="k"), connection=memory_connection)
    assert handle_get(get, connection=memory_connection) == "No record at 'k'."


def test_file_commands(memory_connection, tmp_path, capsys):
    source = tmp_path / "source.bin"
    source.write_bytes(b"0123456789")
    target = tmp_path / "out" / "copy.bin"

    result = handle_put_file(
        PutFileCommand(column_family=TEST_CF, key="f", path=str(source), columns=(("type", "bin"),)),
        connection=memory_connection,
    )
    assert "3 chunk(s)" in result
    assert "Storing source.bin" in capsys.readouterr().out

    result = handle_get_file(GetFileCommand(column_family=TEST_CF, key="f", path=str(target)), connection=memory_connection)
    assert "10 B" in result
    assert target.read_bytes() == b"0123456789"

    handle_delete_file(DeleteFileCommand(column_family=TEST_CF, key="f"), connection=memory_connection)
    result = handle_get_file(GetFileCommand(column_family=TEST_CF, key="f", path=str(target)), connection=memory_connection)
    assert result == "No file at 'f'."


def test_put_file_missing_path(tmp_path):
    mock_connection = Mock(spec=NodeConnection)
    cmd = PutFileCommand(column_family=TEST_CF, key="f", path=str(tmp_path / "missing.txt"))

    assert handle_put_file(cmd, connection=mock_connection).startswith("Error: File not found")
    mock_connection.put_file.assert_not_called()


@pytest.mark.parametrize("limit,expected", [(3, 3), (20, 7)])
def test_scan_respects_limit(memory_connection, limit, expected):
    for i in range(7):
        memory_connection.put_record(TEST_CF, f"k{i}", {"n": str(i)})

    result = handle_scan(ScanCommand(column_family=TEST_CF, limit=limit), connection=memory_connection)

    lines = result.splitlines()
    assert lines[0] == "k0: n=0"
    assert lines[-1] == f"({expected} record(s))"
    assert len(lines) == expected + 1


def test_scan_empty(memory_connection):
    assert handle_scan(ScanCommand(column_family=TEST_CF), connection=memory_connection) == "No records."


def test_dispatch_reports_store_errors(monkeypatch):
    mock_connection = Mock(spec=NodeConnection)
    mock_connection.get_record.side_effect = FaultError("store unreachable")
    monkeypatch.setattr("cli.commands.get_connection", lambda: mock_connection)

    result = dispatch_command(GetRecordCommand(column_family=TEST_CF, key="k"))

    assert result == "Error: store unreachable"
