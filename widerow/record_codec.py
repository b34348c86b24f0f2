"""Mapping between string records and the store's byte columns."""

from typing import Dict, Iterable, List, Optional, Tuple

from common.constants import TEXT_ENCODING
from common.types import Column
from widerow.exceptions import FaultError


def encode(value: str) -> bytes:
    """
    Encode text for the store.

    Raises:
        FaultError: If the text cannot be encoded (e.g. lone surrogates)
    """
    try:
        return value.encode(TEXT_ENCODING)
    except UnicodeEncodeError as e:
        raise FaultError(f"Cannot encode {value!r} as {TEXT_ENCODING}", e) from e


def decode(data: bytes) -> str:
    """
    Decode text read from the store.

    Raises:
        FaultError: If the bytes are not valid text
    """
    try:
        return data.decode(TEXT_ENCODING)
    except UnicodeDecodeError as e:
        raise FaultError(f"Stored bytes are not valid {TEXT_ENCODING}", e) from e


def encode_columns(columns: Dict[str, str]) -> List[Tuple[bytes, bytes]]:
    return [(encode(name), encode(value)) for name, value in columns.items()]


def decode_columns(columns: Iterable[Column]) -> Optional[Dict[str, str]]:
    """
    Turn a row's columns into a record.

    Returns:
        Mapping of column name to value, or None when the row has no columns
        (absent or tombstoned)
    """
    record = {decode(column.name): decode(column.value) for column in columns}
    return record or None
