"""Paginated enumeration of the records of a column family."""

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from common.logging_config import get_logger
from common.types import KeySlice
from widerow import record_codec
from widerow.config import ConnectionConfig
from widerow.file_codec import is_chunk_key
from widerow.store_client import StoreClient

logger = get_logger(__name__)

RecordCallback = Callable[[str, Dict[str, str]], Optional[bool]]


class RecordEnumerator:
    """
    Walks a column family in key order using bounded range scans.

    Each scan starts at the last key of the previous batch (the start bound is
    inclusive), so that row is skipped when seen again. Chunk rows and rows
    without columns are never surfaced.
    """

    def __init__(self, store: StoreClient, config: ConnectionConfig):
        self.store = store
        self.config = config

    def _fetch(self, column_family: str, start_key: str) -> List[KeySlice]:
        return self.store.range_slice(
            column_family,
            record_codec.encode(start_key),
            b"",
            self.config.record_batch_size,
            self.config.read_consistency,
        )

    def _batches(self, column_family: str) -> Iterator[List[Tuple[str, Dict[str, str]]]]:
        """
        Yield the visible records of each batch.

        The loop ends once a batch holds at most one row, since a batch of one
        can only be the boundary row of the previous batch.
        """
        start_key = ""
        previous_last: Optional[str] = None

        while True:
            batch = self._fetch(column_family, start_key)
            logger.debug(f"Fetched batch [cf={column_family}] [start={start_key!r}] [rows={len(batch)}]")

            records = []
            for key_slice in batch:
                key = record_codec.decode(key_slice.key)
                if key == previous_last or is_chunk_key(key):
                    continue
                columns = record_codec.decode_columns(key_slice.columns)
                if columns is None:
                    continue
                records.append((key, columns))

            yield records

            if len(batch) <= 1:
                return
            previous_last = record_codec.decode(batch[-1].key)
            start_key = previous_last

    def for_each_record(self, column_family: str, callback: RecordCallback) -> int:
        """
        Call `callback(key, columns)` for every record in the column family.

        A callback returning False asks to stop; any other return value
        continues. No further records are dispatched once stop was requested
        and no further batches are fetched.

        Returns:
            Number of callback invocations
        """
        count = 0
        stopped = False

        batches = self._batches(column_family)
        try:
            for records in batches:
                for key, columns in records:
                    if stopped:
                        continue
                    count += 1
                    if callback(key, columns) is False:
                        stopped = True
                if stopped:
                    break
        finally:
            batches.close()

        logger.debug(f"Enumerated [cf={column_family}] [count={count}] [stopped={stopped}]")
        return count

    def iter_records(self, column_family: str) -> Iterator[Tuple[str, Dict[str, str]]]:
        for records in self._batches(column_family):
            yield from records
