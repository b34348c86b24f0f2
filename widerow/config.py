"""Connection configuration."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from common.constants import (
    DEFAULT_FILE_CHUNK_SIZE,
    DEFAULT_RECORD_BATCH_SIZE,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_RECORD_BATCH_SIZE,
    MIN_RECORD_BATCH_SIZE,
)
from common.types import Consistency


class ConnectionConfig(BaseModel):
    """
    Settings for a connection bound to one keyspace.

    Validated on construction and on every assignment, so an invalid chunk
    size or batch size can never reach the file codec or the enumerator.

    Attributes:
        keyspace: Keyspace every operation of the connection runs against
        username: Login name; no login is attempted when None
        password: Login password
        read_consistency: Level forwarded with every read (ANY is rejected)
        write_consistency: Level forwarded with every write
        file_chunk_size: Bytes per chunk row when writing files
        record_batch_size: Rows fetched per range scan by the enumerator
        timeout: Per-request timeout in seconds
    """

    model_config = ConfigDict(validate_assignment=True)

    keyspace: str = Field(..., pattern=r"^\w+$")
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    read_consistency: Consistency = Consistency.ONE
    write_consistency: Consistency = Consistency.ANY
    file_chunk_size: int = Field(default=DEFAULT_FILE_CHUNK_SIZE, gt=0)
    record_batch_size: int = Field(
        default=DEFAULT_RECORD_BATCH_SIZE,
        ge=MIN_RECORD_BATCH_SIZE,
        le=MAX_RECORD_BATCH_SIZE,
    )
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    @field_validator("read_consistency")
    @classmethod
    def _reject_any_for_reads(cls, value: Consistency) -> Consistency:
        if value == Consistency.ANY:
            raise ValueError("ANY is not a valid read consistency level")
        return value
