"""Client library for storing records and chunked files in a column-family store."""

from widerow.chunked_reader import ChunkedReader
from widerow.config import ConnectionConfig
from widerow.exceptions import (
    FaultError,
    LoginError,
    SchemaConflictError,
    SchemaNotFoundError,
    WiderowError,
)
from widerow.node_connection import NodeConnection
from widerow.store_client import HttpStoreClient, StoreClient

__all__ = [
    'ChunkedReader',
    'ConnectionConfig',
    'FaultError',
    'HttpStoreClient',
    'LoginError',
    'NodeConnection',
    'SchemaConflictError',
    'SchemaNotFoundError',
    'StoreClient',
    'WiderowError',
]
