"""Row read/write operations with consistency validation."""

from typing import List, Optional

from common.constants import MAX_RECORD_BATCH_SIZE
from common.logging_config import get_logger
from common.types import Column, Consistency, KeySlice
from storenode.exceptions import InvalidRequestError
from storenode.repositories.row_repository import RowRepository
from storenode.services.schema_service import SchemaService

logger = get_logger(__name__)

MAX_RANGE_LIMIT = MAX_RECORD_BATCH_SIZE


class RowService:
    """
    Single-node row access. Consistency levels are accepted and validated but
    every level is trivially satisfied by one node.
    """

    def __init__(self):
        self.row_repo = RowRepository()
        self.schema_service = SchemaService()

    def insert(
        self,
        keyspace: str,
        column_family: str,
        row_key: bytes,
        name: bytes,
        value: bytes,
        timestamp: int,
        consistency: Consistency,
    ) -> bool:
        self._require_key(row_key)
        if not name:
            raise InvalidRequestError("Column name must not be empty")
        self.schema_service.require_column_family(keyspace, column_family)
        return self.row_repo.put_column(keyspace, column_family, row_key, name, value, timestamp)

    def remove(
        self,
        keyspace: str,
        column_family: str,
        row_key: bytes,
        timestamp: int,
        consistency: Consistency,
    ) -> None:
        self._require_key(row_key)
        self.schema_service.require_column_family(keyspace, column_family)
        self.row_repo.remove_row(keyspace, column_family, row_key, timestamp)

    def get_slice(
        self,
        keyspace: str,
        column_family: str,
        row_key: bytes,
        consistency: Consistency,
    ) -> List[Column]:
        self._require_read_consistency(consistency)
        self._require_key(row_key)
        self.schema_service.require_column_family(keyspace, column_family)
        return self.row_repo.get_slice(keyspace, column_family, row_key)

    def get_count(
        self,
        keyspace: str,
        column_family: str,
        row_key: bytes,
        consistency: Consistency,
    ) -> int:
        self._require_read_consistency(consistency)
        self._require_key(row_key)
        self.schema_service.require_column_family(keyspace, column_family)
        return self.row_repo.get_count(keyspace, column_family, row_key)

    def range_slice(
        self,
        keyspace: str,
        column_family: str,
        start_key: bytes,
        end_key: Optional[bytes],
        limit: int,
        consistency: Consistency,
    ) -> List[KeySlice]:
        self._require_read_consistency(consistency)
        if limit < 1 or limit > MAX_RANGE_LIMIT:
            raise InvalidRequestError(f"limit must be between 1 and {MAX_RANGE_LIMIT}, got {limit}")
        if end_key and end_key < start_key:
            raise InvalidRequestError("end_key must not sort before start_key")
        self.schema_service.require_column_family(keyspace, column_family)
        rows = self.row_repo.range_slice(keyspace, column_family, start_key, end_key, limit)
        logger.debug(f"Range slice [cf={keyspace}.{column_family}] limit={limit} returned={len(rows)}")
        return rows

    @staticmethod
    def _require_read_consistency(consistency: Consistency) -> None:
        if consistency == Consistency.ANY:
            raise InvalidRequestError("ANY is not a valid read consistency level")

    @staticmethod
    def _require_key(row_key: bytes) -> None:
        if not row_key:
            raise InvalidRequestError("Row key must not be empty")
