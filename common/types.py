"""Shared data type definitions (consistency levels, columns, key slices, file info)."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class Consistency(str, Enum):
    """
    Tunable consistency levels forwarded opaquely to every store call.

    ANY only applies to writes; the rest apply to reads and writes.
    """
    ANY = "ANY"
    ONE = "ONE"
    QUORUM = "QUORUM"
    LOCAL_QUORUM = "LOCAL_QUORUM"
    EACH_QUORUM = "EACH_QUORUM"
    ALL = "ALL"


class ReplicationStrategy(str, Enum):
    """How replicas of a keyspace are distributed among nodes."""
    SIMPLE = "SimpleStrategy"
    NETWORK_TOPOLOGY = "NetworkTopologyStrategy"
    OLD_NETWORK_TOPOLOGY = "OldNetworkTopologyStrategy"


@dataclass(frozen=True)
class Column:
    """
    A single named, timestamped value within a row.
    """
    name: bytes
    value: bytes
    timestamp: int = 0


@dataclass(frozen=True)
class KeySlice:
    """
    One row returned by a range scan. An empty column list marks a tombstoned row.
    """
    key: bytes
    columns: List[Column] = field(default_factory=list)


@dataclass(frozen=True)
class ColumnFamilyDefinition:
    keyspace: str
    name: str
    binary_columns: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class KeyspaceDefinition:
    name: str
    strategy_class: str = ReplicationStrategy.SIMPLE.value
    strategy_options: Dict[str, str] = field(default_factory=dict)
    column_families: List[ColumnFamilyDefinition] = field(default_factory=list)


def chunk_count(byte_count: int, chunk_size: int) -> int:
    """
    Number of chunk rows needed for a payload, by integer ceiling division.

    Args:
        byte_count: Total payload length in bytes
        chunk_size: Bytes per chunk (must be positive)

    Returns:
        ceil(byte_count / chunk_size)
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return (byte_count + chunk_size - 1) // chunk_size


@dataclass(frozen=True)
class FileInfo:
    """
    Metadata of a stored file. chunk_count is always derived, never stored.
    """
    byte_count: int
    chunk_size: int
    columns: Dict[str, str] = field(default_factory=dict)

    @property
    def chunk_count(self) -> int:
        return chunk_count(self.byte_count, self.chunk_size)
