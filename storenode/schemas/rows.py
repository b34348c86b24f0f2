"""Pydantic schemas for row endpoints. Binary fields are base64 text."""

from typing import List

from pydantic import BaseModel, Field

from common.types import Consistency


class ColumnModel(BaseModel):
    """A timestamped column."""
    name: str
    value: str
    timestamp: int


class InsertRequest(BaseModel):
    """Request model for a single column upsert."""
    key: str
    name: str
    value: str
    timestamp: int = Field(..., ge=0)
    consistency: Consistency = Consistency.ONE


class InsertResponse(BaseModel):
    """Whether the write won against existing data."""
    applied: bool


class RemoveRequest(BaseModel):
    """Request model for tombstoning a whole row."""
    key: str
    timestamp: int = Field(..., ge=0)
    consistency: Consistency = Consistency.ONE


class SliceResponse(BaseModel):
    """All columns of one row."""
    columns: List[ColumnModel]


class CountResponse(BaseModel):
    """Column count of one row."""
    count: int


class KeySliceModel(BaseModel):
    """One row of a range scan."""
    key: str
    columns: List[ColumnModel]


class RangeSliceResponse(BaseModel):
    """Rows of a range scan, in ascending key order."""
    rows: List[KeySliceModel]
