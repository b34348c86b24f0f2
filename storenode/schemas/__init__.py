"""Pydantic schemas for API requests and responses."""

from storenode.schemas.auth import LoginRequest, LoginResponse
from storenode.schemas.keyspaces import (
    AddKeyspaceRequest,
    AddColumnFamilyRequest,
    ColumnFamilyResponse,
    KeyspaceResponse,
    ListKeyspacesResponse,
)
from storenode.schemas.rows import (
    ColumnModel,
    InsertRequest,
    InsertResponse,
    RemoveRequest,
    SliceResponse,
    CountResponse,
    KeySliceModel,
    RangeSliceResponse,
)
from storenode.schemas.common import ErrorResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "AddKeyspaceRequest",
    "AddColumnFamilyRequest",
    "ColumnFamilyResponse",
    "KeyspaceResponse",
    "ListKeyspacesResponse",
    "ColumnModel",
    "InsertRequest",
    "InsertResponse",
    "RemoveRequest",
    "SliceResponse",
    "CountResponse",
    "KeySliceModel",
    "RangeSliceResponse",
    "ErrorResponse",
]
