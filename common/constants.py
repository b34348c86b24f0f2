"""Project-wide constants (chunk layout, default sizes, ports)."""

DEFAULT_FILE_CHUNK_SIZE: int = 8 * 1024 * 1024  # 8 MiB default chunk size
DEFAULT_RECORD_BATCH_SIZE: int = 5
MIN_RECORD_BATCH_SIZE: int = 2
MAX_RECORD_BATCH_SIZE: int = 10000  # largest range scan a store node serves

DEFAULT_STORE_PORT: int = 9160
DEFAULT_TIMEOUT_SECONDS: float = 30.0

CHUNK_COLUMN: str = "bytes"
CHUNK_KEY_INFIX: str = "-chunk-"

BYTE_COUNT_COLUMN: str = "byteCount"
CHUNK_SIZE_COLUMN: str = "chunkSize"

TEXT_ENCODING: str = "utf-8"
