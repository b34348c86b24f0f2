"""Shared pytest fixtures for all tests."""

import tempfile
from pathlib import Path
from typing import Dict, Generator, List, Tuple

import pytest
from fastapi.testclient import TestClient

from cli.config import Config
from common.types import (
    Column,
    ColumnFamilyDefinition,
    KeyspaceDefinition,
    KeySlice,
    ReplicationStrategy,
)
from storenode.database import init_database
from storenode.main import app
from widerow.config import ConnectionConfig
from widerow.exceptions import SchemaConflictError, SchemaNotFoundError
from widerow.node_connection import NodeConnection
from widerow.store_client import HttpStoreClient, StoreClient

TEST_KEYSPACE = "testks"
TEST_CF = "testcf"


class InMemoryStore(StoreClient):
    """
    StoreClient keeping rows in dictionaries, with the store node's
    last-write-wins and tombstone rules. Every call is recorded in `calls`.
    """

    def __init__(self, keyspace: str = TEST_KEYSPACE):
        self.keyspace = keyspace
        self.keyspaces: Dict[str, KeyspaceDefinition] = {}
        self.rows: Dict[str, Dict[bytes, Dict[bytes, Column]]] = {}
        self.tombstones: Dict[str, Dict[bytes, int]] = {}
        self.calls: List[Tuple] = []
        self.logins: List[Tuple[str, str]] = []
        self.closed = 0

    def _cf(self, column_family: str) -> Dict[bytes, Dict[bytes, Column]]:
        if column_family not in self.rows:
            raise SchemaNotFoundError(f"Column family '{column_family}' not defined")
        return self.rows[column_family]

    def login(self, username, password):
        self.logins.append((username, password))

    def describe_keyspaces(self):
        return list(self.keyspaces.values())

    def describe_keyspace(self, name):
        if name not in self.keyspaces:
            raise SchemaNotFoundError(name)
        return self.keyspaces[name]

    def add_keyspace(self, definition):
        if definition.name in self.keyspaces:
            raise SchemaConflictError(definition.name)
        self.keyspaces[definition.name] = definition

    def drop_keyspace(self, name):
        if name not in self.keyspaces:
            raise SchemaNotFoundError(name)
        for cf in self.keyspaces.pop(name).column_families:
            self.rows.pop(cf.name, None)
            self.tombstones.pop(cf.name, None)

    def add_column_family(self, definition: ColumnFamilyDefinition):
        keyspace = self.describe_keyspace(definition.keyspace)
        if definition.name in self.rows:
            raise SchemaConflictError(definition.name)
        keyspace.column_families.append(definition)
        self.rows[definition.name] = {}
        self.tombstones[definition.name] = {}

    def drop_column_family(self, name):
        if name not in self.rows:
            raise SchemaNotFoundError(name)
        keyspace = self.keyspaces[self.keyspace]
        keyspace.column_families[:] = [cf for cf in keyspace.column_families if cf.name != name]
        del self.rows[name]
        del self.tombstones[name]

    def put(self, row_key, column_family, column_name, value, timestamp, consistency):
        self.calls.append(("put", row_key, column_name))
        rows = self._cf(column_family)
        if timestamp <= self.tombstones[column_family].get(row_key, -1):
            return
        row = rows.setdefault(row_key, {})
        existing = row.get(column_name)
        if existing is None or timestamp >= existing.timestamp:
            row[column_name] = Column(column_name, value, timestamp)

    def remove(self, row_key, column_family, timestamp, consistency):
        self.calls.append(("remove", row_key))
        rows = self._cf(column_family)
        tombstones = self.tombstones[column_family]
        tombstones[row_key] = max(timestamp, tombstones.get(row_key, timestamp))
        row = rows.get(row_key, {})
        for name in [n for n, c in row.items() if c.timestamp <= timestamp]:
            del row[name]

    def get_slice(self, row_key, column_family, consistency):
        self.calls.append(("get_slice", row_key))
        row = self._cf(column_family).get(row_key, {})
        return [row[name] for name in sorted(row)]

    def get_count(self, row_key, column_family, consistency):
        self.calls.append(("get_count", row_key))
        return len(self._cf(column_family).get(row_key, {}))

    def range_slice(self, column_family, start_key, end_key, limit, consistency):
        self.calls.append(("range_slice", start_key, limit))
        rows = self._cf(column_family)
        keys = sorted(
            key for key in set(rows) | set(self.tombstones[column_family])
            if key >= start_key and (not end_key or key <= end_key)
        )[:limit]
        return [
            KeySlice(key, [rows.get(key, {})[n] for n in sorted(rows.get(key, {}))])
            for key in keys
        ]

    def close(self):
        self.closed += 1


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Returns:
        Path to temporary .widerow directory
    """
    config_dir = tmp_path / '.widerow'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """Config instance backed by a temporary config file."""
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path


@pytest.fixture
def test_db(monkeypatch) -> Generator[Path, None, None]:
    """
    Create a temporary store database for each test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "store.db"
        monkeypatch.setattr("storenode.database.DATABASE_PATH", str(db_path))
        monkeypatch.setattr("storenode.config.DATABASE_PATH", str(db_path))
        init_database()
        yield db_path


@pytest.fixture
def api_client(test_db):
    """FastAPI test client over a fresh store database."""
    return TestClient(app)


@pytest.fixture
def http_store(api_client):
    """HttpStoreClient routed through the in-process store node."""
    return HttpStoreClient("http://testserver", TEST_KEYSPACE, session=api_client)


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def make_connection():
    """
    Factory building a NodeConnection over a given store client.

    Connections are closed after the test.
    """
    opened = []

    def _make(store, **overrides):
        settings = {"keyspace": TEST_KEYSPACE}
        settings.update(overrides)
        connection = NodeConnection(ConnectionConfig(**settings), store=store)
        opened.append(connection)
        return connection

    yield _make
    for connection in opened:
        connection.close()


@pytest.fixture
def memory_connection(memory_store, make_connection):
    """Connection over an in-memory store with the test keyspace and column family created."""
    connection = make_connection(memory_store, file_chunk_size=4)
    connection.add_keyspace(ReplicationStrategy.SIMPLE)
    connection.add_column_family(TEST_CF)
    return connection


@pytest.fixture
def store_connection(http_store, make_connection):
    """Connection over the in-process store node with the test keyspace and column family created."""
    connection = make_connection(http_store, file_chunk_size=4)
    connection.add_keyspace(ReplicationStrategy.SIMPLE, {"replication_factor": "1"})
    connection.add_column_family(TEST_CF)
    return connection
