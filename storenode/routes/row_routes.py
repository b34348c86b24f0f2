"""Row access routes: insert, remove, slice, count and range scans."""

import binascii
from typing import Optional

from fastapi import APIRouter, Depends, Query

from common.protocol import column_to_wire, decode_bytes, key_slice_to_wire
from common.types import Column, Consistency
from storenode.auth import get_current_user
from storenode.exceptions import InvalidRequestError
from storenode.schemas.rows import (
    ColumnModel,
    CountResponse,
    InsertRequest,
    InsertResponse,
    KeySliceModel,
    RangeSliceResponse,
    RemoveRequest,
    SliceResponse,
)
from storenode.services.row_service import RowService

router = APIRouter(prefix="/keyspaces/{keyspace}/column-families/{column_family}", tags=["Rows"])


def _decode(text: str, field: str) -> bytes:
    try:
        return decode_bytes(text)
    except (binascii.Error, ValueError) as e:
        raise InvalidRequestError(f"Field '{field}' is not valid base64: {e}")


def _column_model(column: Column) -> ColumnModel:
    return ColumnModel(**column_to_wire(column))


@router.post("/columns", response_model=InsertResponse)
async def insert(
    keyspace: str,
    column_family: str,
    request: InsertRequest,
    current_user: Optional[str] = Depends(get_current_user),
):
    """Upsert one column; older timestamps lose to newer ones."""
    applied = RowService().insert(
        keyspace,
        column_family,
        _decode(request.key, "key"),
        _decode(request.name, "name"),
        _decode(request.value, "value"),
        request.timestamp,
        request.consistency,
    )
    return InsertResponse(applied=applied)


@router.post("/remove", response_model=InsertResponse)
async def remove(
    keyspace: str,
    column_family: str,
    request: RemoveRequest,
    current_user: Optional[str] = Depends(get_current_user),
):
    """Tombstone an entire row at the given timestamp."""
    RowService().remove(
        keyspace,
        column_family,
        _decode(request.key, "key"),
        request.timestamp,
        request.consistency,
    )
    return InsertResponse(applied=True)


@router.get("/slice", response_model=SliceResponse)
async def get_slice(
    keyspace: str,
    column_family: str,
    key: str = Query(...),
    consistency: Consistency = Query(Consistency.ONE),
    current_user: Optional[str] = Depends(get_current_user),
):
    """All columns of one row; an empty list means the row does not exist."""
    columns = RowService().get_slice(keyspace, column_family, _decode(key, "key"), consistency)
    return SliceResponse(columns=[_column_model(c) for c in columns])


@router.get("/count", response_model=CountResponse)
async def get_count(
    keyspace: str,
    column_family: str,
    key: str = Query(...),
    consistency: Consistency = Query(Consistency.ONE),
    current_user: Optional[str] = Depends(get_current_user),
):
    """Number of live columns in one row."""
    count = RowService().get_count(keyspace, column_family, _decode(key, "key"), consistency)
    return CountResponse(count=count)


@router.get("/range", response_model=RangeSliceResponse)
async def range_slice(
    keyspace: str,
    column_family: str,
    start_key: str = Query(""),
    end_key: str = Query(""),
    limit: int = Query(100),
    consistency: Consistency = Query(Consistency.ONE),
    current_user: Optional[str] = Depends(get_current_user),
):
    """
    Up to `limit` rows with keys >= start_key (and <= end_key when given),
    in ascending key order. Tombstoned rows appear with no columns.
    """
    rows = RowService().range_slice(
        keyspace,
        column_family,
        _decode(start_key, "start_key"),
        _decode(end_key, "end_key") or None,
        limit,
        consistency,
    )
    return RangeSliceResponse(rows=[KeySliceModel(**key_slice_to_wire(row)) for row in rows])
