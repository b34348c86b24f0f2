"""Store RPC surface: the abstract collaborator contract and its HTTP client."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from common.logging_config import get_logger
from common.protocol import columns_from_wire, encode_bytes, key_slice_from_wire
from common.types import (
    Column,
    ColumnFamilyDefinition,
    Consistency,
    KeyspaceDefinition,
    KeySlice,
)
from widerow.exceptions import FaultError, LoginError, SchemaConflictError, SchemaNotFoundError

logger = get_logger(__name__)

CONFLICT_CODES = {"ALREADY_EXISTS"}
NOT_FOUND_CODES = {"KEYSPACE_NOT_FOUND", "COLUMN_FAMILY_NOT_FOUND"}

# Raised while picking fields out of a response body of the wrong shape
MALFORMED_BODY_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


class StoreClient(ABC):
    """
    Blocking RPC surface of a sorted column-family store, bound to one keyspace.

    Every slice returns all columns of a row. Row operations raise FaultError
    on any failure. DDL operations raise SchemaConflictError or
    SchemaNotFoundError for existence conflicts and FaultError otherwise.
    """

    @abstractmethod
    def login(self, username: str, password: str) -> None:
        """Authenticate the session. Raises LoginError when rejected."""

    @abstractmethod
    def describe_keyspaces(self) -> List[KeyspaceDefinition]:
        """All keyspaces known to the store."""

    @abstractmethod
    def describe_keyspace(self, name: str) -> KeyspaceDefinition:
        """One keyspace with its column families."""

    @abstractmethod
    def add_keyspace(self, definition: KeyspaceDefinition) -> None:
        """Create a keyspace."""

    @abstractmethod
    def drop_keyspace(self, name: str) -> None:
        """Drop a keyspace and everything in it."""

    @abstractmethod
    def add_column_family(self, definition: ColumnFamilyDefinition) -> None:
        """Create a column family in the bound keyspace."""

    @abstractmethod
    def drop_column_family(self, name: str) -> None:
        """Drop a column family of the bound keyspace."""

    @abstractmethod
    def put(
        self,
        row_key: bytes,
        column_family: str,
        column_name: bytes,
        value: bytes,
        timestamp: int,
        consistency: Consistency,
    ) -> None:
        """Upsert one column."""

    @abstractmethod
    def remove(self, row_key: bytes, column_family: str, timestamp: int, consistency: Consistency) -> None:
        """Tombstone an entire row."""

    @abstractmethod
    def get_slice(self, row_key: bytes, column_family: str, consistency: Consistency) -> List[Column]:
        """All columns of one row; empty when absent or tombstoned."""

    @abstractmethod
    def get_count(self, row_key: bytes, column_family: str, consistency: Consistency) -> int:
        """Number of columns of one row."""

    @abstractmethod
    def range_slice(
        self,
        column_family: str,
        start_key: bytes,
        end_key: bytes,
        limit: int,
        consistency: Consistency,
    ) -> List[KeySlice]:
        """Up to `limit` rows with key >= start_key, ascending. Empty end_key is open-ended."""

    @abstractmethod
    def close(self) -> None:
        """Release the transport."""


class HttpStoreClient(StoreClient):
    """StoreClient speaking JSON over HTTP to a store node. No retries."""

    def __init__(
        self,
        base_url: str,
        keyspace: str,
        timeout: float = 30.0,
        session: Optional[httpx.Client] = None,
    ):
        """
        Initialize the store client.

        Args:
            base_url: Store node URL (e.g., "http://localhost:9160")
            keyspace: Keyspace every row and column family call is bound to
            timeout: Request timeout in seconds
            session: Pre-built httpx client (used by tests)
        """
        self.keyspace = keyspace
        self.session = session or httpx.Client(base_url=base_url, timeout=timeout)
        logger.debug(f"Initialized HttpStoreClient [base_url={base_url}] [keyspace={keyspace}]")

    def _request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        try:
            response = self.session.request(method, endpoint, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Transport error: {method} {endpoint} error={type(e).__name__}: {e}")
            raise FaultError(f"Store request failed: {method} {endpoint}: {e}", e) from e

        logger.debug(f"Response received: {method} {endpoint} status={response.status_code}")
        return response

    @staticmethod
    def _error_code(response: httpx.Response) -> str:
        try:
            return str(response.json().get("code", "UNKNOWN"))
        except (AttributeError, ValueError):
            return "UNKNOWN"

    def _check(self, response: httpx.Response, schema_signals: bool = False) -> None:
        if response.is_success:
            return

        code = self._error_code(response)
        message = f"Store returned {response.status_code} ({code}) for {response.request.method} {response.request.url.path}"

        if schema_signals and response.status_code == 409 and code in CONFLICT_CODES:
            raise SchemaConflictError(message)
        if schema_signals and response.status_code == 404 and code in NOT_FOUND_CODES:
            raise SchemaNotFoundError(message)

        logger.warning(message)
        raise FaultError(message)

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            return response.json()
        except ValueError as e:
            raise FaultError("Store returned a malformed response body", e) from e

    def _cf_path(self, column_family: str, suffix: str) -> str:
        return f"/keyspaces/{self.keyspace}/column-families/{column_family}/{suffix}"

    def login(self, username: str, password: str) -> None:
        logger.info(f"Logging in to store as: {username}")
        response = self._request('POST', '/auth/login', json={'username': username, 'password': password})
        if response.status_code in (401, 403):
            raise LoginError(f"Login rejected for user '{username}' ({self._error_code(response)})")
        self._check(response)
        try:
            api_key = self._json(response)['api_key']
        except MALFORMED_BODY_ERRORS as e:
            raise FaultError("Store returned a malformed login response", e) from e
        self.session.headers['Authorization'] = f"Bearer {api_key}"

    def describe_keyspaces(self) -> List[KeyspaceDefinition]:
        response = self._request('GET', '/keyspaces')
        self._check(response)
        try:
            return [_keyspace_from_wire(obj) for obj in self._json(response)['keyspaces']]
        except MALFORMED_BODY_ERRORS as e:
            raise FaultError("Store returned a malformed keyspace list", e) from e

    def describe_keyspace(self, name: str) -> KeyspaceDefinition:
        response = self._request('GET', f'/keyspaces/{name}')
        self._check(response, schema_signals=True)
        try:
            return _keyspace_from_wire(self._json(response))
        except MALFORMED_BODY_ERRORS as e:
            raise FaultError("Store returned a malformed keyspace", e) from e

    def add_keyspace(self, definition: KeyspaceDefinition) -> None:
        response = self._request('POST', '/keyspaces', json={
            'name': definition.name,
            'strategy_class': definition.strategy_class,
            'strategy_options': definition.strategy_options,
        })
        self._check(response, schema_signals=True)

    def drop_keyspace(self, name: str) -> None:
        response = self._request('DELETE', f'/keyspaces/{name}')
        self._check(response, schema_signals=True)

    def add_column_family(self, definition: ColumnFamilyDefinition) -> None:
        response = self._request('POST', f'/keyspaces/{definition.keyspace}/column-families', json={
            'name': definition.name,
            'binary_columns': definition.binary_columns,
        })
        self._check(response, schema_signals=True)

    def drop_column_family(self, name: str) -> None:
        response = self._request('DELETE', f'/keyspaces/{self.keyspace}/column-families/{name}')
        self._check(response, schema_signals=True)

    def put(self, row_key, column_family, column_name, value, timestamp, consistency) -> None:
        response = self._request('POST', self._cf_path(column_family, 'columns'), json={
            'key': encode_bytes(row_key),
            'name': encode_bytes(column_name),
            'value': encode_bytes(value),
            'timestamp': timestamp,
            'consistency': consistency.value,
        })
        self._check(response)

    def remove(self, row_key, column_family, timestamp, consistency) -> None:
        response = self._request('POST', self._cf_path(column_family, 'remove'), json={
            'key': encode_bytes(row_key),
            'timestamp': timestamp,
            'consistency': consistency.value,
        })
        self._check(response)

    def get_slice(self, row_key, column_family, consistency) -> List[Column]:
        response = self._request('GET', self._cf_path(column_family, 'slice'), params={
            'key': encode_bytes(row_key),
            'consistency': consistency.value,
        })
        self._check(response)
        try:
            return columns_from_wire(self._json(response)['columns'])
        except MALFORMED_BODY_ERRORS as e:
            raise FaultError("Store returned a malformed slice", e) from e

    def get_count(self, row_key, column_family, consistency) -> int:
        response = self._request('GET', self._cf_path(column_family, 'count'), params={
            'key': encode_bytes(row_key),
            'consistency': consistency.value,
        })
        self._check(response)
        try:
            return int(self._json(response)['count'])
        except MALFORMED_BODY_ERRORS as e:
            raise FaultError("Store returned a malformed count", e) from e

    def range_slice(self, column_family, start_key, end_key, limit, consistency) -> List[KeySlice]:
        response = self._request('GET', self._cf_path(column_family, 'range'), params={
            'start_key': encode_bytes(start_key),
            'end_key': encode_bytes(end_key),
            'limit': limit,
            'consistency': consistency.value,
        })
        self._check(response)
        try:
            return [key_slice_from_wire(obj) for obj in self._json(response)['rows']]
        except MALFORMED_BODY_ERRORS as e:
            raise FaultError("Store returned a malformed range slice", e) from e

    def close(self) -> None:
        try:
            self.session.close()
        except httpx.HTTPError as e:
            raise FaultError("Error closing store session", e) from e


def _keyspace_from_wire(obj: Dict[str, Any]) -> KeyspaceDefinition:
    return KeyspaceDefinition(
        name=obj['name'],
        strategy_class=obj['strategy_class'],
        strategy_options=obj.get('strategy_options', {}),
        column_families=[
            ColumnFamilyDefinition(
                keyspace=cf['keyspace'],
                name=cf['name'],
                binary_columns=cf.get('binary_columns', []),
            )
            for cf in obj.get('column_families', [])
        ],
    )
