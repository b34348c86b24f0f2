"""Shared wire format helpers between the store node and its HTTP clients.

Row keys, column names and values are raw bytes in the store; on the wire they
travel as base64 text inside JSON bodies and query strings.
"""

import base64
from typing import Any, Dict, List

from common.types import Column, KeySlice


def encode_bytes(data: bytes) -> str:
    """Encode raw bytes as base64 ASCII text."""
    return base64.b64encode(data).decode('ascii')


def decode_bytes(text: str) -> bytes:
    """Decode base64 ASCII text back to raw bytes."""
    return base64.b64decode(text.encode('ascii'), validate=True)


def column_to_wire(column: Column) -> Dict[str, Any]:
    return {
        'name': encode_bytes(column.name),
        'value': encode_bytes(column.value),
        'timestamp': column.timestamp,
    }


def column_from_wire(obj: Dict[str, Any]) -> Column:
    return Column(
        name=decode_bytes(obj['name']),
        value=decode_bytes(obj['value']),
        timestamp=int(obj.get('timestamp', 0)),
    )


def key_slice_to_wire(key_slice: KeySlice) -> Dict[str, Any]:
    return {
        'key': encode_bytes(key_slice.key),
        'columns': [column_to_wire(c) for c in key_slice.columns],
    }


def key_slice_from_wire(obj: Dict[str, Any]) -> KeySlice:
    return KeySlice(
        key=decode_bytes(obj['key']),
        columns=[column_from_wire(c) for c in obj.get('columns', [])],
    )


def columns_from_wire(items: List[Dict[str, Any]]) -> List[Column]:
    return [column_from_wire(item) for item in items]
