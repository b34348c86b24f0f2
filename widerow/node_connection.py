"""Connection to a single store node, bound to one keyspace."""

from typing import BinaryIO, Dict, Iterator, Optional, Set, Tuple

from common.constants import DEFAULT_STORE_PORT
from common.logging_config import get_logger
from common.types import (
    ColumnFamilyDefinition,
    FileInfo,
    KeyspaceDefinition,
    ReplicationStrategy,
)
from widerow import record_codec
from widerow.chunked_reader import ChunkedReader
from widerow.clock import MonotonicClock
from widerow.config import ConnectionConfig
from widerow.exceptions import FaultError, SchemaConflictError, SchemaNotFoundError
from widerow.file_codec import FileCodec
from widerow.record_enumerator import RecordCallback, RecordEnumerator
from widerow.store_client import HttpStoreClient, StoreClient

logger = get_logger(__name__)


class NodeConnection:
    """
    Record, file and schema operations against one store node.

    Not thread-safe; use one connection per thread. Every method blocks until
    the store answers. Store failures raise FaultError; absence is reported
    as None, False or a no-op.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        host: str = "localhost",
        port: int = DEFAULT_STORE_PORT,
        store: Optional[StoreClient] = None,
    ):
        """
        Open a connection and log in when credentials are configured.

        Args:
            config: Connection settings
            host: Store node host name or address
            port: Store node port
            store: Pre-built store client (skips building an HTTP client)

        Raises:
            LoginError: If the configured credentials are rejected
            FaultError: If the store cannot be reached
        """
        self.config = config
        self.host = host
        self.port = port
        self.store = store or HttpStoreClient(
            f"http://{host}:{port}", config.keyspace, timeout=config.timeout
        )
        self.clock = MonotonicClock()
        self._closed = False

        if config.username is not None:
            try:
                self.store.login(config.username, config.password or "")
            except Exception:
                self.close()
                raise

        self.files = FileCodec(self.store, config, self.clock)
        self.records = RecordEnumerator(self.store, config)
        logger.info(f"Connected to {host}:{port} [keyspace={config.keyspace}]")

    def __enter__(self) -> "NodeConnection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # Schema

    def keyspaces(self) -> Set[str]:
        return {definition.name for definition in self.store.describe_keyspaces()}

    def add_keyspace(
        self,
        strategy: ReplicationStrategy,
        options: Optional[Dict[str, str]] = None,
    ) -> bool:
        """
        Create the configured keyspace.

        Returns:
            False if it already exists
        """
        logger.info(f"Adding keyspace: {self.config.keyspace} [strategy={strategy.value}]")
        definition = KeyspaceDefinition(
            name=self.config.keyspace,
            strategy_class=strategy.value,
            strategy_options=dict(options or {}),
        )
        try:
            self.store.add_keyspace(definition)
        except SchemaConflictError:
            return False
        return True

    def delete_keyspace(self) -> bool:
        logger.info(f"Deleting keyspace: {self.config.keyspace}")
        try:
            self.store.drop_keyspace(self.config.keyspace)
        except SchemaNotFoundError:
            return False
        return True

    def column_families(self) -> Set[str]:
        try:
            definition = self.store.describe_keyspace(self.config.keyspace)
        except SchemaNotFoundError:
            return set()
        return {cf.name for cf in definition.column_families}

    def add_column_family(self, name: str, *binary_columns: str) -> bool:
        """
        Create a column family in the configured keyspace.

        Args:
            name: Column family name
            *binary_columns: Columns whose values are raw bytes rather than text

        Returns:
            False if it already exists
        """
        logger.info(f"Adding column family: {name}")
        definition = ColumnFamilyDefinition(
            keyspace=self.config.keyspace,
            name=name,
            binary_columns=list(binary_columns),
        )
        try:
            self.store.add_column_family(definition)
        except SchemaConflictError:
            return False
        except SchemaNotFoundError as e:
            raise FaultError(f"Keyspace '{self.config.keyspace}' does not exist", e) from e
        return True

    def delete_column_family(self, name: str) -> bool:
        logger.info(f"Deleting column family: {name}")
        try:
            self.store.drop_column_family(name)
        except SchemaNotFoundError:
            return False
        return True

    # Records

    def put_record(self, column_family: str, key: str, columns: Dict[str, str]) -> None:
        """Write every column of `columns` to the record, with one timestamp."""
        logger.debug(f"Putting record [cf={column_family}] [key={key}]")
        row_key = record_codec.encode(key)
        timestamp = self.clock.next()
        for name, value in record_codec.encode_columns(columns):
            self.store.put(row_key, column_family, name, value, timestamp, self.config.write_consistency)

    def add_record(self, column_family: str, key: str, columns: Dict[str, str]) -> bool:
        """
        Write a record only if nothing exists at `key`.

        Returns:
            False if the key is already in use
        """
        if self.exists(column_family, key):
            return False
        self.put_record(column_family, key, columns)
        return True

    def get_record(self, column_family: str, key: str) -> Optional[Dict[str, str]]:
        columns = self.store.get_slice(record_codec.encode(key), column_family, self.config.read_consistency)
        return record_codec.decode_columns(columns)

    def exists(self, column_family: str, key: str) -> bool:
        count = self.store.get_count(record_codec.encode(key), column_family, self.config.read_consistency)
        return count > 0

    def delete_record(self, column_family: str, key: str) -> None:
        logger.debug(f"Deleting record [cf={column_family}] [key={key}]")
        self.store.remove(record_codec.encode(key), column_family, self.clock.next(), self.config.write_consistency)

    # Files

    def put_file(
        self,
        column_family: str,
        key: str,
        stream: BinaryIO,
        columns: Optional[Dict[str, str]] = None,
    ) -> None:
        self.files.put_file(column_family, key, stream, columns)

    def add_file(
        self,
        column_family: str,
        key: str,
        stream: BinaryIO,
        columns: Optional[Dict[str, str]] = None,
    ) -> bool:
        return self.files.add_file(column_family, key, stream, columns)

    def get_file_content(self, column_family: str, key: str) -> Optional[ChunkedReader]:
        return self.files.get_file_content(column_family, key)

    def get_file_info(self, column_family: str, key: str) -> Optional[FileInfo]:
        return self.files.get_file_info(column_family, key)

    def delete_file(self, column_family: str, key: str) -> None:
        self.files.delete_file(column_family, key)

    # Enumeration

    def for_each_record(self, column_family: str, callback: RecordCallback) -> int:
        return self.records.for_each_record(column_family, callback)

    def iter_records(self, column_family: str) -> Iterator[Tuple[str, Dict[str, str]]]:
        return self.records.iter_records(column_family)

    def close(self) -> None:
        """Release the store client. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self.store.close()
        except Exception as e:
            logger.error(f"Error closing connection to {self.host}:{self.port}: {e}")
