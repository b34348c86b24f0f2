"""Pydantic schemas for keyspace and column family endpoints."""

from typing import Dict, List

from pydantic import BaseModel, Field

NAME_PATTERN = r"^\w+$"


class AddKeyspaceRequest(BaseModel):
    """Request model for keyspace creation."""
    name: str = Field(..., pattern=NAME_PATTERN, max_length=48)
    strategy_class: str
    strategy_options: Dict[str, str] = Field(default_factory=dict)


class AddColumnFamilyRequest(BaseModel):
    """Request model for column family creation."""
    name: str = Field(..., pattern=NAME_PATTERN, max_length=48)
    binary_columns: List[str] = Field(default_factory=list)


class ColumnFamilyResponse(BaseModel):
    """Response model for column family metadata."""
    keyspace: str
    name: str
    binary_columns: List[str]


class KeyspaceResponse(BaseModel):
    """Response model for keyspace metadata."""
    name: str
    strategy_class: str
    strategy_options: Dict[str, str]
    column_families: List[ColumnFamilyResponse]


class ListKeyspacesResponse(BaseModel):
    """Response model for keyspace listing."""
    keyspaces: List[KeyspaceResponse]
