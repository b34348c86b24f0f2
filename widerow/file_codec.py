"""Chunked file storage on top of plain records."""

import re
from typing import BinaryIO, Dict, Iterator, Optional

from common.constants import (
    BYTE_COUNT_COLUMN,
    CHUNK_COLUMN,
    CHUNK_KEY_INFIX,
    CHUNK_SIZE_COLUMN,
)
from common.logging_config import get_logger
from common.types import FileInfo
from widerow import record_codec
from widerow.chunked_reader import ChunkedReader
from widerow.clock import MonotonicClock
from widerow.config import ConnectionConfig
from widerow.exceptions import FaultError
from widerow.store_client import StoreClient

logger = get_logger(__name__)

CHUNK_KEY_PATTERN = re.compile(re.escape(CHUNK_KEY_INFIX) + r"\d+$")


def chunk_key(key: str, index: int) -> str:
    return f"{key}{CHUNK_KEY_INFIX}{index}"


def is_chunk_key(key: str) -> bool:
    return CHUNK_KEY_PATTERN.search(key) is not None


def parse_file_info(record: Optional[Dict[str, str]]) -> Optional[FileInfo]:
    """
    Interpret a metadata record.

    Returns:
        FileInfo, or None when the record is absent or is a plain record
        without file metadata

    Raises:
        FaultError: If the metadata values are not valid sizes
    """
    if not record or BYTE_COUNT_COLUMN not in record or CHUNK_SIZE_COLUMN not in record:
        return None

    try:
        byte_count = int(record[BYTE_COUNT_COLUMN])
        chunk_size = int(record[CHUNK_SIZE_COLUMN])
    except ValueError as e:
        raise FaultError(f"Malformed file metadata: {record!r}", e) from e

    if byte_count < 0 or chunk_size <= 0:
        raise FaultError(f"Malformed file metadata: byteCount={byte_count} chunkSize={chunk_size}")

    columns = {
        name: value for name, value in record.items()
        if name not in (BYTE_COUNT_COLUMN, CHUNK_SIZE_COLUMN)
    }
    return FileInfo(byte_count=byte_count, chunk_size=chunk_size, columns=columns)


def _read_block(stream: BinaryIO, size: int) -> bytes:
    """Read until `size` bytes are collected or the stream ends."""
    parts = []
    remaining = size
    while remaining > 0:
        data = stream.read(remaining)
        if not data:
            break
        parts.append(data)
        remaining -= len(data)
    return b"".join(parts)


class FileCodec:
    """
    Stores a byte stream as one metadata record plus fixed-size chunk rows.

    Layout for a file at `key`:
        key              -> caller columns + byteCount + chunkSize
        key-chunk-0..n-1 -> {"bytes": <raw block>}

    Chunks are written first and the metadata last, so a reader never sees
    metadata for chunks that were not written.
    """

    def __init__(self, store: StoreClient, config: ConnectionConfig, clock: MonotonicClock):
        self.store = store
        self.config = config
        self.clock = clock

    def _exists(self, column_family: str, key: str) -> bool:
        count = self.store.get_count(record_codec.encode(key), column_family, self.config.read_consistency)
        return count > 0

    def _read_record(self, column_family: str, key: str) -> Optional[Dict[str, str]]:
        columns = self.store.get_slice(record_codec.encode(key), column_family, self.config.read_consistency)
        return record_codec.decode_columns(columns)

    def put_file(
        self,
        column_family: str,
        key: str,
        stream: BinaryIO,
        columns: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Store the contents of `stream` at `key`, replacing whatever is there.

        The stream is always closed, whether the write succeeds or not.

        Raises:
            FaultError: On store failures or if reading the stream fails
        """
        try:
            if self._exists(column_family, key):
                self.delete_file(column_family, key)

            chunk_size = self.config.file_chunk_size
            consistency = self.config.write_consistency
            timestamp = self.clock.next()

            byte_count = 0
            index = 0
            while True:
                try:
                    block = _read_block(stream, chunk_size)
                except OSError as e:
                    raise FaultError(f"Failed reading input stream for '{key}'", e) from e
                if not block:
                    break
                self.store.put(
                    record_codec.encode(chunk_key(key, index)),
                    column_family,
                    CHUNK_COLUMN.encode(),
                    block,
                    timestamp,
                    consistency,
                )
                byte_count += len(block)
                index += 1

            metadata = dict(columns or {})
            metadata[BYTE_COUNT_COLUMN] = str(byte_count)
            metadata[CHUNK_SIZE_COLUMN] = str(chunk_size)
            row_key = record_codec.encode(key)
            for name, value in record_codec.encode_columns(metadata):
                self.store.put(row_key, column_family, name, value, timestamp, consistency)

            logger.info(f"Stored file [cf={column_family}] [key={key}] [bytes={byte_count}] [chunks={index}]")
        finally:
            stream.close()

    def add_file(
        self,
        column_family: str,
        key: str,
        stream: BinaryIO,
        columns: Optional[Dict[str, str]] = None,
    ) -> bool:
        """
        Store a file only if nothing exists at `key`.

        Returns:
            False (and nothing written, stream closed) if the key is in use
        """
        try:
            in_use = self._exists(column_family, key)
        except Exception:
            stream.close()
            raise

        if in_use:
            stream.close()
            logger.debug(f"File key already in use [cf={column_family}] [key={key}]")
            return False

        self.put_file(column_family, key, stream, columns)
        return True

    def get_file_info(self, column_family: str, key: str) -> Optional[FileInfo]:
        return parse_file_info(self._read_record(column_family, key))

    def get_file_content(self, column_family: str, key: str) -> Optional[ChunkedReader]:
        """
        Open a stored file for reading.

        Returns:
            A lazy reader that fetches one chunk row at a time, or None when
            no file exists at `key`
        """
        info = self.get_file_info(column_family, key)
        if info is None:
            return None
        return ChunkedReader(self._chunks(column_family, key, info.chunk_count))

    def _chunks(self, column_family: str, key: str, count: int) -> Iterator[bytes]:
        for index in range(count):
            name = chunk_key(key, index)
            columns = self.store.get_slice(record_codec.encode(name), column_family, self.config.read_consistency)
            block = next((c.value for c in columns if c.name == CHUNK_COLUMN.encode()), None)
            if block is None:
                raise FaultError(f"Missing chunk row '{name}' for file '{key}'")
            yield block

    def delete_file(self, column_family: str, key: str) -> None:
        """
        Delete a file's chunk rows and then its metadata record.

        No-op when nothing exists at `key`. A plain record at `key` is deleted
        on its own. Not atomic: a failure part way leaves the metadata record
        in place with some chunk rows already gone.
        """
        record = self._read_record(column_family, key)
        if record is None:
            return

        info = parse_file_info(record)
        consistency = self.config.write_consistency
        timestamp = self.clock.next()

        if info is not None:
            for index in range(info.chunk_count):
                self.store.remove(record_codec.encode(chunk_key(key, index)), column_family, timestamp, consistency)
        self.store.remove(record_codec.encode(key), column_family, timestamp, consistency)

        logger.info(f"Deleted file [cf={column_family}] [key={key}]")
